"""
Feeding orchestration — what happens when an operator feeds a pond.

    recommend()       biomass → ration (informational, operator may override)
    record_feeding()  consume from the ledger, then write the FeedingEvent

Holds no state of its own. Feeding never changes population or weight.
"""

import logging

from django.db import transaction

from feedman import dosing
from feedman.exceptions import DosingError, LivestockError, StockError
from feedman.models.pond import Pond
from feedman.models.records import FeedingEvent
from feedman.quantities import QUANTITY_PLACES, to_decimal
from feedman.results import FeedingResult, RecommendationResult
from feedman.services.ledger import StockLedger, ledger as default_ledger
from feedman.services.livestock import Livestock, livestock as default_livestock

logger = logging.getLogger('feedman')


class FeedingOrchestrator:
    """
    Usage:
        from feedman import feeding

        rec = feeding.recommend(pond.pk)
        rec.ration.per_meal_kg          # pre-fill the form

        result = feeding.record_feeding(pond.pk, Decimal('12.5'), actor='op-2')
        if not result.ok:
            show(result.error.message)
    """

    def __init__(self, ledger: StockLedger | None = None, livestock: Livestock | None = None):
        self.ledger = ledger or default_ledger
        self.livestock = livestock or default_livestock

    def recommend(self, pond_id, meals_per_day: int | None = None) -> RecommendationResult:
        """
        Suggested ration for a pond from its current biomass.

        Failures: NOT_FOUND, NO_ACTIVE_BATCH, INVALID_WEIGHT
        """
        if not Pond.objects.filter(pk=pond_id).exists():
            return RecommendationResult(error=LivestockError('NOT_FOUND', pond_id=pond_id), pond_id=pond_id)

        batch = self.livestock.active_batch(pond_id)
        if batch is None:
            return RecommendationResult(error=LivestockError('NO_ACTIVE_BATCH', pond_id=pond_id), pond_id=pond_id)

        biomass = batch.biomass_kg
        try:
            ration = dosing.ration_for(biomass, batch.average_weight_g, meals_per_day)
        except DosingError as e:
            return RecommendationResult(error=e, pond_id=pond_id)

        return RecommendationResult(
            pond_id=pond_id,
            biomass_kg=biomass,
            average_weight_g=batch.average_weight_g,
            ration=ration,
        )

    def record_feeding(self, pond_id, amount_kg, actor, notes: str = '',
                       warehouse_id=None) -> FeedingResult:
        """
        Deduct ``amount_kg`` of feed and log the feeding.

        The warehouse defaults to the pond's assigned one. Ledger failures
        (INSUFFICIENT_STOCK, NOT_FOUND, CONTENTION...) come back unchanged.

        Failures: INVALID_AMOUNT, NOT_FOUND (pond), any ledger failure
        """
        amount = to_decimal(amount_kg, QUANTITY_PLACES)
        if amount is None or amount <= 0:
            return FeedingResult(error=StockError('INVALID_AMOUNT', requested=amount_kg))

        pond = Pond.objects.filter(pk=pond_id).first()
        if pond is None:
            return FeedingResult(error=LivestockError('NOT_FOUND', pond_id=pond_id))

        if warehouse_id is None:
            warehouse_id = pond.warehouse_id

        recommendation = self.recommend(pond_id)
        recommended_kg = recommendation.ration.per_meal_kg if recommendation.ok else None

        with transaction.atomic():
            consumed = self.ledger.consume(
                warehouse_id,
                amount,
                actor,
                note=notes or f"Arraçoamento {pond.name}",
            )
            if not consumed.ok:
                return FeedingResult(error=consumed.error, recommendation=recommendation)

            event = FeedingEvent.objects.create(
                pond=pond,
                warehouse_id=warehouse_id,
                movement=consumed.movement,
                amount_kg=amount,
                recommended_kg=(
                    recommended_kg.quantize(dosing.GRAM) if recommended_kg is not None else None
                ),
                actor=actor,
                notes=notes or '',
            )

        logger.info(
            "feeding.recorded",
            extra={
                "pond_id": pond_id,
                "warehouse_id": warehouse_id,
                "qty": str(amount),
                "recommended": str(recommended_kg) if recommended_kg is not None else None,
                "actor": actor,
            },
        )
        return FeedingResult(event=event, movement=consumed.movement, recommendation=recommendation)


feeding = FeedingOrchestrator()
