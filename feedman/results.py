"""
Result values returned by ledger, livestock and feeding operations.

Business outcomes (insufficient stock, contention, not found...) are data,
not exceptions:

    result = ledger.transfer(central.pk, satelite.pk, Decimal('30'), actor='op-1')
    if result.ok:
        print(result.movement)
    elif result.error.retryable:
        print("Tente novamente")

Callers that prefer exceptions use ``result.unwrap()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from feedman.exceptions import BaseError

if TYPE_CHECKING:
    from feedman.dosing import Ration
    from feedman.models import (
        BiometrySample,
        FeedingEvent,
        FishBatch,
        MortalityRecord,
        StockMovement,
        TransferJournal,
        Warehouse,
    )
    from feedman.protocols.store import WarehouseSnapshot


@dataclass(frozen=True)
class Result:
    """Base result: ``error`` is None on success."""

    error: BaseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return self on success, raise the error otherwise."""
        if self.error is not None:
            raise self.error
        return self

    def as_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {'ok': False, 'error': self.error.as_dict()}
        return {'ok': True}


# ══════════════════════════════════════════════════════════════
# LEDGER
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TransferResult(Result):
    source: WarehouseSnapshot | None = None
    destination: WarehouseSnapshot | None = None
    movement: StockMovement | None = None
    journal: TransferJournal | None = None
    attempts: int = 0

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        if self.ok:
            data.update({
                'movement_id': self.movement.pk,
                'source_quantity': str(self.source.quantity),
                'destination_quantity': str(self.destination.quantity),
            })
        return data


@dataclass(frozen=True)
class ConsumeResult(Result):
    warehouse: WarehouseSnapshot | None = None
    movement: StockMovement | None = None
    attempts: int = 0

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        if self.ok:
            data.update({
                'movement_id': self.movement.pk,
                'quantity': str(self.warehouse.quantity),
            })
        return data


@dataclass(frozen=True)
class AdjustResult(Result):
    warehouse: WarehouseSnapshot | None = None
    movement: StockMovement | None = None
    attempts: int = 0


@dataclass(frozen=True)
class RegisterResult(Result):
    warehouse: Warehouse | None = None
    movement: StockMovement | None = None


@dataclass(frozen=True)
class Drift:
    """Recorded balance vs. balance recomputed from movements."""

    warehouse_id: int
    recorded: Decimal
    computed: Decimal

    @property
    def difference(self) -> Decimal:
        return self.recorded - self.computed

    @property
    def consistent(self) -> bool:
        return self.recorded == self.computed


# ══════════════════════════════════════════════════════════════
# LIVESTOCK
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class StockingResult(Result):
    batch: FishBatch | None = None


@dataclass(frozen=True)
class BiometryResult(Result):
    sample: BiometrySample | None = None
    batch: FishBatch | None = None


@dataclass(frozen=True)
class MortalityResult(Result):
    record: MortalityRecord | None = None
    population: int | None = None
    attempts: int = 0


# ══════════════════════════════════════════════════════════════
# FEEDING
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class RecommendationResult(Result):
    pond_id: int | None = None
    biomass_kg: Decimal | None = None
    average_weight_g: Decimal | None = None
    ration: Ration | None = None

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        if self.ok:
            data.update({
                'biomass_kg': str(self.biomass_kg),
                'average_weight_g': str(self.average_weight_g),
                'rate': str(self.ration.rate),
                'daily_kg': str(self.ration.daily_kg),
                'per_meal_kg': str(self.ration.per_meal_kg),
                'bags': self.ration.bags,
                'remainder_kg': str(self.ration.remainder_kg),
            })
        return data


@dataclass(frozen=True)
class FeedingResult(Result):
    event: FeedingEvent | None = None
    movement: StockMovement | None = None
    recommendation: RecommendationResult | None = None
