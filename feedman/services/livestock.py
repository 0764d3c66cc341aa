"""
Livestock state — stocking, biometry, mortality and biomass.

Pond.population is a shared counter (several operators may report deaths at
once), so mortality uses the same discipline as the ledger: conditional
UPDATE on the expected value, bounded retry.
"""

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from feedman.conf import feedman_settings
from feedman.exceptions import LivestockError
from feedman.models.batch import FishBatch
from feedman.models.pond import Pond
from feedman.models.records import BiometrySample, MortalityRecord
from feedman.quantities import GRAM, QUANTITY_PLACES, to_decimal
from feedman.results import BiometryResult, MortalityResult, StockingResult

logger = logging.getLogger('feedman')


def _positive_int(value) -> int | None:
    """Whole number > 0, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        number = to_decimal(value)
        if number is None or number != number.to_integral_value():
            return None
        number = int(number)
    return number if number > 0 else None


class Livestock:
    """Pond population and growth state."""

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    def active_batch(self, pond_id) -> FishBatch | None:
        return FishBatch.objects.active().for_pond(pond_id).first()

    def estimate_biomass_kg(self, pond_id) -> Decimal:
        """
        Live biomass = current population × average weight (g) / 1000.

        Returns 0 when the pond has no ACTIVE batch.
        """
        batch = self.active_batch(pond_id)
        if batch is None:
            return Decimal('0')
        return batch.biomass_kg

    # ══════════════════════════════════════════════════════════════
    # EVENTS
    # ══════════════════════════════════════════════════════════════

    def stock_pond(self, pond_id, species: str, population, average_weight_g,
                   actor: str = '') -> StockingResult:
        """
        Open a new ACTIVE batch and set the pond population.

        Failures: NOT_FOUND, INVALID_INPUT, BATCH_ALREADY_ACTIVE
        """
        count = _positive_int(population)
        weight = to_decimal(average_weight_g, QUANTITY_PLACES)
        if count is None or weight is None or weight <= 0 or not (species or '').strip():
            return StockingResult(error=LivestockError(
                'INVALID_INPUT', population=population, average_weight_g=average_weight_g,
            ))

        if not Pond.objects.filter(pk=pond_id).exists():
            return StockingResult(error=LivestockError('NOT_FOUND', pond_id=pond_id))

        if self.active_batch(pond_id) is not None:
            return StockingResult(error=LivestockError('BATCH_ALREADY_ACTIVE', pond_id=pond_id))

        try:
            with transaction.atomic():
                batch = FishBatch.objects.create(
                    pond_id=pond_id,
                    species=species.strip(),
                    initial_population=count,
                    current_population=count,
                    average_weight_g=weight,
                )
                Pond.objects.filter(pk=pond_id).update(population=count, updated_at=timezone.now())
        except IntegrityError:
            # Lost the race against another stocking of the same pond
            return StockingResult(error=LivestockError('BATCH_ALREADY_ACTIVE', pond_id=pond_id))

        logger.info(
            "livestock.stock",
            extra={"pond_id": pond_id, "batch_id": batch.pk, "population": count, "actor": actor},
        )
        return StockingResult(batch=batch)

    def record_biometry(self, pond_id, average_weight_g, sample_size,
                        notes: str = '', average_length_cm=None) -> BiometryResult:
        """
        Append a growth sample and make its weight the batch's average weight.

        Failures: INVALID_INPUT (weight/sample size not > 0), NOT_FOUND, NO_ACTIVE_BATCH
        """
        weight = to_decimal(average_weight_g, QUANTITY_PLACES)
        size = _positive_int(sample_size)
        length = to_decimal(average_length_cm, 2) if average_length_cm not in (None, '') else None
        if weight is None or weight <= 0 or size is None or (length is not None and length <= 0):
            return BiometryResult(error=LivestockError(
                'INVALID_INPUT', average_weight_g=average_weight_g, sample_size=sample_size,
            ))

        if not Pond.objects.filter(pk=pond_id).exists():
            return BiometryResult(error=LivestockError('NOT_FOUND', pond_id=pond_id))

        with transaction.atomic():
            batch = FishBatch.objects.select_for_update().active().for_pond(pond_id).first()
            if batch is None:
                return BiometryResult(error=LivestockError('NO_ACTIVE_BATCH', pond_id=pond_id))

            sample = BiometrySample.objects.create(
                pond_id=pond_id,
                batch=batch,
                average_weight_g=weight,
                average_length_cm=length,
                sample_size=size,
                biomass_kg=(Decimal(batch.current_population) * weight / Decimal('1000')).quantize(GRAM),
                notes=notes or '',
            )
            FishBatch.objects.filter(pk=batch.pk).update(average_weight_g=weight)
            batch.refresh_from_db()

        logger.info(
            "livestock.biometry",
            extra={"pond_id": pond_id, "batch_id": batch.pk, "average_weight_g": str(weight)},
        )
        return BiometryResult(sample=sample, batch=batch)

    def record_mortality(self, pond_id, dead_count, cause: str = '', actor: str = '') -> MortalityResult:
        """
        Remove dead fish from the pond and its ACTIVE batch.

        Population never goes negative: asking to remove more fish than the
        pond holds fails with INSUFFICIENT_POPULATION and changes nothing.

        Failures: INVALID_INPUT, NOT_FOUND, NO_ACTIVE_BATCH,
                  INSUFFICIENT_POPULATION, CONTENTION
        """
        dead = _positive_int(dead_count)
        if dead is None:
            return MortalityResult(error=LivestockError('INVALID_INPUT', dead_count=dead_count))

        max_attempts = max(feedman_settings.CAS_MAX_RETRIES, 1)
        for attempt in range(1, max_attempts + 1):
            before = Pond.objects.filter(pk=pond_id).values_list('population', flat=True).first()
            if before is None:
                return MortalityResult(error=LivestockError('NOT_FOUND', pond_id=pond_id))

            batch = self.active_batch(pond_id)
            if batch is None:
                return MortalityResult(error=LivestockError('NO_ACTIVE_BATCH', pond_id=pond_id))

            if dead > before:
                return MortalityResult(error=LivestockError(
                    'INSUFFICIENT_POPULATION', population=before, requested=dead,
                ))

            with transaction.atomic():
                swapped = Pond.objects.filter(pk=pond_id, population=before).update(
                    population=before - dead,
                    updated_at=timezone.now(),
                )
                if swapped:
                    mirrored = FishBatch.objects.filter(
                        pk=batch.pk,
                        current_population__gte=dead,
                    ).update(current_population=F('current_population') - dead)
                    if not mirrored:
                        transaction.set_rollback(True)
                        return MortalityResult(error=LivestockError(
                            'INSUFFICIENT_POPULATION',
                            population=batch.current_population,
                            requested=dead,
                        ))
                    record = MortalityRecord.objects.create(
                        pond_id=pond_id,
                        batch=batch,
                        count=dead,
                        cause=(cause or '').strip() or 'Não especificada',
                        population_before=before,
                        actor=actor or '',
                    )
                    logger.info(
                        "livestock.mortality",
                        extra={
                            "pond_id": pond_id,
                            "dead": dead,
                            "population": before - dead,
                            "cause": record.cause,
                        },
                    )
                    return MortalityResult(record=record, population=before - dead, attempts=attempt)

            logger.debug("livestock.mortality.conflict", extra={"pond_id": pond_id, "attempt": attempt})

        logger.warning("livestock.mortality.contention", extra={"pond_id": pond_id})
        return MortalityResult(
            error=LivestockError('CONTENTION', pond_id=pond_id),
            attempts=max_attempts,
        )


livestock = Livestock()
