"""
StockMovement model — Immutable ledger of quantity changes.
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from feedman.models.enums import MovementKind


class StockMovementQuerySet(models.QuerySet):

    def touching(self, warehouse_id):
        """Movements where the warehouse is source or destination."""
        return self.filter(Q(source_id=warehouse_id) | Q(destination_id=warehouse_id))


class StockMovement(models.Model):
    """
    Immutable record of a quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new ADJUSTMENT movements
    - amount is always positive; direction comes from source/destination:
        TRANSFER     source → destination
        CONSUMPTION  source → (eaten)
        ADJUSTMENT   (correction) → destination  or  source → (correction)
    - The primary key is the ledger sequence (newest = highest)

    Written by the ledger only after the warehouse quantities it describes
    have been changed.
    """

    kind = models.CharField(
        max_length=20,
        choices=MovementKind.choices,
        verbose_name=_('Tipo'),
    )
    source = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='outgoing_movements',
        verbose_name=_('Origem'),
    )
    destination = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='incoming_movements',
        verbose_name=_('Destino'),
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    actor = models.CharField(
        max_length=128,
        verbose_name=_('Operador'),
    )
    note = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Observação'),
    )
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movimento')
        verbose_name_plural = _('Movimentos')
        ordering = ['-pk']
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='movement_amount_positive',
            ),
            models.CheckConstraint(
                condition=Q(source__isnull=False) | Q(destination__isnull=False),
                name='movement_has_warehouse',
            ),
        ]
        indexes = [
            models.Index(fields=['source', 'id'], name='movement_source_seq_idx'),
            models.Index(fields=['destination', 'id'], name='movement_dest_seq_idx'),
        ]

    def save(self, *args, **kwargs):
        # Immutability check
        if self.pk:
            raise ValueError(
                "Movimentos são imutáveis. "
                "Para corrigir, registre um novo ajuste."
            )
        if self.amount is None or self.amount <= Decimal('0'):
            raise ValueError("Quantidade do movimento deve ser positiva")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(
            "Movimentos são imutáveis. "
            "Para estornar, registre um novo ajuste."
        )

    def delta_for(self, warehouse_id) -> Decimal:
        """Signed effect of this movement on one warehouse."""
        delta = Decimal('0')
        if self.destination_id == warehouse_id:
            delta += self.amount
        if self.source_id == warehouse_id:
            delta -= self.amount
        return delta

    def __str__(self) -> str:
        src = self.source_id or '-'
        dst = self.destination_id or '-'
        return f"{self.get_kind_display()} {self.amount} [{src} → {dst}]"
