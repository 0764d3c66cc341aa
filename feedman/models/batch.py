"""
FishBatch model — the fish currently stocked in a pond.

Usage:
    from feedman import livestock

    livestock.stock_pond(pond.pk, 'Tilápia', 5000, Decimal('2.5'), actor='op-1')
    livestock.active_batch(pond.pk)
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from feedman.models.enums import BatchStatus


class FishBatchQuerySet(models.QuerySet):
    """Custom QuerySet for FishBatch with convenience filters."""

    def active(self):
        return self.filter(status=BatchStatus.ACTIVE)

    def for_pond(self, pond_id):
        return self.filter(pond_id=pond_id)


class FishBatch(models.Model):
    """
    Stocked batch of fish.

    At most one ACTIVE batch per pond (enforced by a partial unique
    constraint). current_population mirrors Pond.population decrements;
    average_weight_g is updated by biometry samples only.
    """

    pond = models.ForeignKey(
        'feedman.Pond',
        on_delete=models.PROTECT,
        related_name='batches',
        verbose_name=_('Viveiro'),
    )
    species = models.CharField(max_length=100, verbose_name=_('Espécie'))
    initial_population = models.PositiveIntegerField(verbose_name=_('População inicial'))
    current_population = models.PositiveIntegerField(verbose_name=_('População atual'))
    average_weight_g = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Peso médio (g)'),
    )
    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    started_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Povoado em'))
    closed_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Encerrado em'))

    objects = FishBatchQuerySet.as_manager()

    class Meta:
        verbose_name = _('Lote de peixes')
        verbose_name_plural = _('Lotes de peixes')
        ordering = ['-started_at']
        constraints = [
            models.UniqueConstraint(
                fields=['pond'],
                condition=Q(status=BatchStatus.ACTIVE),
                name='one_active_batch_per_pond',
            ),
            models.CheckConstraint(
                condition=Q(average_weight_g__gte=0),
                name='batch_weight_non_negative',
            ),
        ]

    @property
    def biomass_kg(self) -> Decimal:
        """Estimated live biomass: population × average weight."""
        return Decimal(self.current_population) * self.average_weight_g / Decimal('1000')

    def __str__(self) -> str:
        return f"{self.species} @ {self.pond_id} ({self.current_population} × {self.average_weight_g} g)"
