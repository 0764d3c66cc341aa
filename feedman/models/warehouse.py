"""
Warehouse model — Where feed is stored.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from feedman.models.enums import WarehouseKind


class WarehouseQuerySet(models.QuerySet):
    """Custom QuerySet for Warehouse with convenience filters."""

    def globals(self):
        return self.filter(kind=WarehouseKind.GLOBAL)

    def satellites(self):
        return self.filter(kind=WarehouseKind.SATELLITE)

    def with_stock(self):
        """Warehouses holding any feed."""
        return self.filter(_quantity__gt=0)

    def for_farm(self, farm_ref):
        return self.filter(farm_ref=farm_ref)


class Warehouse(models.Model):
    """
    Feed warehouse — central (GLOBAL) or field distribution point (SATELLITE).

    Performance:
    - _quantity is the current balance, O(1) read
    - It changes ONLY through the warehouse store compare-and-set,
      driven by the ledger (see feedman.services.ledger)
    - Use ledger.verify() to audit it against the movement history

    Examples:
        Warehouse.objects.create(code='central', name='Depósito Central')
        Warehouse.objects.create(code='sat-norte', name='Satélite Norte',
                                 kind=WarehouseKind.SATELLITE, parent=central)
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Identificador único (ex: central, satelite-norte)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Nome'),
    )
    unit = models.CharField(
        max_length=10,
        default='kg',
        verbose_name=_('Unidade'),
    )
    kind = models.CharField(
        max_length=20,
        choices=WarehouseKind.choices,
        default=WarehouseKind.GLOBAL,
        verbose_name=_('Tipo'),
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='satellites',
        verbose_name=_('Depósito central'),
        help_text=_('Somente satélites: depósito central que os abastece.'),
    )
    farm_ref = models.CharField(
        max_length=64,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Fazenda'),
    )

    # Current balance (mutated by compare-and-set only)
    _quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade'),
    )

    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = WarehouseQuerySet.as_manager()

    class Meta:
        verbose_name = _('Depósito')
        verbose_name_plural = _('Depósitos')
        ordering = ['kind', 'name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(_quantity__gte=0),
                name='warehouse_quantity_non_negative',
            ),
        ]

    @property
    def quantity(self) -> Decimal:
        """Current balance — O(1) read."""
        return self._quantity

    @property
    def is_satellite(self) -> bool:
        return self.kind == WarehouseKind.SATELLITE

    def clean(self):
        if self.kind == WarehouseKind.GLOBAL and self.parent_id is not None:
            raise ValidationError({'parent': _('Depósito central não possui depósito pai.')})
        if self.parent_id is not None:
            if self.pk is not None and self.parent_id == self.pk:
                raise ValidationError({'parent': _('Um depósito não pode abastecer a si mesmo.')})
            parent = Warehouse.objects.filter(pk=self.parent_id).only('kind').first()
            # Missing parent is reported by field validation
            if parent is not None and parent.kind != WarehouseKind.GLOBAL:
                raise ValidationError({'parent': _('O depósito pai deve ser central.')})

    def __str__(self) -> str:
        return f"{self.name} ({self._quantity} {self.unit})"
