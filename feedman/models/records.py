"""
Append-only livestock and feeding records.

- BiometrySample: growth sampling (sets the batch average weight)
- MortalityRecord: dead fish removed from the population
- FeedingEvent: feed given to a pond, linked to its ledger movement
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class AppendOnlyModel(models.Model):
    """Rows are written once and never changed."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(f"{type(self).__name__} é somente inclusão.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError(f"{type(self).__name__} é somente inclusão.")


class BiometrySample(AppendOnlyModel):
    """Growth sample. The newest sample's weight is the batch's average weight."""

    pond = models.ForeignKey(
        'feedman.Pond',
        on_delete=models.PROTECT,
        related_name='biometry_samples',
        verbose_name=_('Viveiro'),
    )
    batch = models.ForeignKey(
        'feedman.FishBatch',
        on_delete=models.PROTECT,
        related_name='biometry_samples',
        verbose_name=_('Lote'),
    )
    average_weight_g = models.DecimalField(max_digits=10, decimal_places=3, verbose_name=_('Peso médio (g)'))
    average_length_cm = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Comprimento médio (cm)'),
    )
    sample_size = models.PositiveIntegerField(verbose_name=_('Peixes amostrados'))
    biomass_kg = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        verbose_name=_('Biomassa estimada (kg)'),
        help_text=_('População × peso médio no momento da amostragem'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Biometria')
        verbose_name_plural = _('Biometrias')
        ordering = ['-timestamp', '-pk']


class MortalityRecord(AppendOnlyModel):
    """Dead fish removed from a pond."""

    pond = models.ForeignKey(
        'feedman.Pond',
        on_delete=models.PROTECT,
        related_name='mortality_records',
        verbose_name=_('Viveiro'),
    )
    batch = models.ForeignKey(
        'feedman.FishBatch',
        on_delete=models.PROTECT,
        related_name='mortality_records',
        verbose_name=_('Lote'),
    )
    count = models.PositiveIntegerField(verbose_name=_('Quantidade'))
    cause = models.CharField(max_length=255, default='Não especificada', verbose_name=_('Causa'))
    population_before = models.PositiveIntegerField(verbose_name=_('População anterior'))
    actor = models.CharField(max_length=128, blank=True, default='', verbose_name=_('Operador'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Mortalidade')
        verbose_name_plural = _('Mortalidades')
        ordering = ['-timestamp', '-pk']


class FeedingEvent(AppendOnlyModel):
    """Feed given to a pond. Stock was deducted by ``movement``."""

    pond = models.ForeignKey(
        'feedman.Pond',
        on_delete=models.PROTECT,
        related_name='feeding_events',
        verbose_name=_('Viveiro'),
    )
    warehouse = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        related_name='feeding_events',
        verbose_name=_('Depósito'),
    )
    movement = models.OneToOneField(
        'feedman.StockMovement',
        on_delete=models.PROTECT,
        related_name='feeding_event',
        verbose_name=_('Movimento'),
    )
    amount_kg = models.DecimalField(max_digits=12, decimal_places=3, verbose_name=_('Quantidade (kg)'))
    recommended_kg = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        null=True,
        blank=True,
        verbose_name=_('Recomendado (kg)'),
    )
    actor = models.CharField(max_length=128, verbose_name=_('Operador'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Arraçoamento')
        verbose_name_plural = _('Arraçoamentos')
        ordering = ['-timestamp', '-pk']
