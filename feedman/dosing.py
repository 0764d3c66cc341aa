"""
Feed dosing — isolated, testable, pure.

Daily ration is a fraction of the pond biomass; the fraction depends on the
average fish weight (small fish eat proportionally more):

    avg weight (g)   rate
    ≤ 20             8 %
    ≤ 150            5 %
    ≤ 500            3 %
    > 500            1.5 %

Examples:
    recommended_daily_ration_kg(Decimal('50'), Decimal('100'))   # 2.5
    per_meal_ration_kg(Decimal('2.5'))                            # 2.5 / 3
    bag_breakdown(Decimal('95'))                                  # (2, 15)
"""

from dataclasses import dataclass
from decimal import Decimal

from feedman.conf import feedman_settings
from feedman.exceptions import DosingError
from feedman.quantities import GRAM, to_decimal


def _rate_table() -> list[tuple[Decimal | None, Decimal]]:
    return [
        (None if limit is None else Decimal(str(limit)), Decimal(str(rate)))
        for limit, rate in feedman_settings.FEEDING_RATE_TABLE
    ]


def feeding_rate(average_weight_g) -> Decimal:
    """
    Fraction of biomass to feed per day for a given average weight.

    Raises:
        DosingError('INVALID_WEIGHT'): weight missing, not a finite number or negative
    """
    weight = to_decimal(average_weight_g)
    if weight is None or weight < 0:
        raise DosingError('INVALID_WEIGHT', average_weight_g=average_weight_g)

    table = _rate_table()
    for limit, rate in table:
        if limit is None or weight <= limit:
            return rate
    # Table without an open-ended bracket: heaviest rate applies
    return table[-1][1]


def recommended_daily_ration_kg(biomass_kg, average_weight_g) -> Decimal:
    """
    Feed mass per day for the pond.

    Zero biomass (empty pond) gives zero, not an error.

    Raises:
        DosingError('INVALID_WEIGHT'): weight missing, not a finite number or negative
        DosingError('INVALID_BIOMASS'): biomass missing, not a finite number or negative
    """
    rate = feeding_rate(average_weight_g)
    biomass = to_decimal(biomass_kg)
    if biomass is None or biomass < 0:
        raise DosingError('INVALID_BIOMASS', biomass_kg=biomass_kg)
    if biomass == 0:
        return Decimal('0')
    return biomass * rate


def per_meal_ration_kg(daily_kg, meals_per_day: int | None = None) -> Decimal:
    """Split the daily ration over the day's feedings (default MEALS_PER_DAY)."""
    meals = feedman_settings.MEALS_PER_DAY if meals_per_day is None else meals_per_day
    if meals is None or meals <= 0:
        raise DosingError('INVALID_MEALS', meals_per_day=meals)
    return Decimal(str(daily_kg)) / Decimal(meals)


def bag_breakdown(kg, bag_size_kg=None) -> tuple[int, Decimal]:
    """
    Express a mass as full bags plus loose kilograms.

    Returns:
        (full_bags, remainder_kg)
    """
    size = Decimal(str(bag_size_kg if bag_size_kg is not None else feedman_settings.BAG_SIZE_KG))
    mass = Decimal(str(kg))
    if size <= 0 or mass <= 0:
        return 0, max(mass, Decimal('0'))
    return int(mass // size), mass % size


@dataclass(frozen=True)
class Ration:
    """Daily ration with its derived figures."""

    rate: Decimal
    daily_kg: Decimal
    per_meal_kg: Decimal
    meals_per_day: int
    bags: int
    remainder_kg: Decimal

    @property
    def rate_percent(self) -> Decimal:
        return self.rate * 100


def ration_for(biomass_kg, average_weight_g, meals_per_day: int | None = None) -> Ration:
    """Bundle rate, daily, per-meal and bag figures for one pond."""
    meals = feedman_settings.MEALS_PER_DAY if meals_per_day is None else meals_per_day
    daily = recommended_daily_ration_kg(biomass_kg, average_weight_g)
    bags, remainder = bag_breakdown(daily)
    return Ration(
        rate=feeding_rate(average_weight_g),
        daily_kg=daily,
        per_meal_kg=per_meal_ration_kg(daily, meals),
        meals_per_day=meals,
        bags=bags,
        remainder_kg=remainder,
    )
