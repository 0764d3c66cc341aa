"""
Pond model — where the fish live and eat from.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Pond(models.Model):
    """
    Grow-out pond.

    population is the authoritative live fish count. It is set by stocking
    and only decremented by mortality (see feedman.services.livestock),
    always through a conditional UPDATE.

    warehouse is where feedings deduct from by default.
    """

    name = models.CharField(max_length=100, verbose_name=_('Nome'))
    warehouse = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        related_name='ponds',
        verbose_name=_('Depósito de ração'),
    )
    population = models.PositiveIntegerField(default=0, verbose_name=_('População'))
    area_m2 = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Área (m²)'),
    )
    farm_ref = models.CharField(
        max_length=64,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Fazenda'),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Viveiro')
        verbose_name_plural = _('Viveiros')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
