"""
Tests for the feed dosing calculation.
"""

from decimal import Decimal

import pytest

from feedman import DosingError
from feedman.dosing import (
    bag_breakdown,
    feeding_rate,
    per_meal_ration_kg,
    ration_for,
    recommended_daily_ration_kg,
)


class TestFeedingRate:
    """Tests for feeding_rate()."""

    @pytest.mark.parametrize('weight, rate', [
        (Decimal('0'), Decimal('0.08')),
        (Decimal('5'), Decimal('0.08')),
        (Decimal('20'), Decimal('0.08')),
        (Decimal('20.001'), Decimal('0.05')),
        (Decimal('100'), Decimal('0.05')),
        (Decimal('150'), Decimal('0.05')),
        (Decimal('151'), Decimal('0.03')),
        (Decimal('500'), Decimal('0.03')),
        (Decimal('500.5'), Decimal('0.015')),
        (Decimal('2000'), Decimal('0.015')),
    ])
    def test_brackets(self, weight, rate):
        assert feeding_rate(weight) == rate

    def test_rate_never_increases_with_weight(self):
        weights = [Decimal(w) for w in range(0, 1001, 5)]
        rates = [feeding_rate(w) for w in weights]

        assert rates == sorted(rates, reverse=True)

    def test_accepts_plain_numbers(self):
        assert feeding_rate(100) == Decimal('0.05')
        assert feeding_rate('12.5') == Decimal('0.08')

    @pytest.mark.parametrize('weight', [None, Decimal('-1'), -0.5, 'abc', float('nan'), 'NaN', 'Infinity'])
    def test_invalid_weight(self, weight):
        with pytest.raises(DosingError) as exc:
            feeding_rate(weight)

        assert exc.value.code == 'INVALID_WEIGHT'

    def test_dosing_error_is_value_error(self):
        with pytest.raises(ValueError):
            feeding_rate(None)

    def test_custom_table(self, settings):
        settings.FEEDMAN = {'FEEDING_RATE_TABLE': [[150, '0.05'], [None, '0.03']]}

        assert feeding_rate(Decimal('10')) == Decimal('0.05')
        assert feeding_rate(Decimal('300')) == Decimal('0.03')


class TestDailyRation:
    """Tests for recommended_daily_ration_kg()."""

    def test_fifty_kg_at_one_hundred_grams(self):
        """500 fish × 100 g = 50 kg biomass, 5 % → 2.5 kg/day."""
        assert recommended_daily_ration_kg(Decimal('50'), Decimal('100')) == Decimal('2.5')

    def test_zero_biomass_is_zero(self):
        assert recommended_daily_ration_kg(Decimal('0'), Decimal('100')) == Decimal('0')

    def test_zero_biomass_still_checks_weight(self):
        with pytest.raises(DosingError) as exc:
            recommended_daily_ration_kg(Decimal('0'), None)

        assert exc.value.code == 'INVALID_WEIGHT'

    @pytest.mark.parametrize('biomass', [None, Decimal('-0.1'), 'abc', float('nan'), 'NaN', Decimal('Infinity')])
    def test_invalid_biomass(self, biomass):
        with pytest.raises(DosingError) as exc:
            recommended_daily_ration_kg(biomass, Decimal('100'))

        assert exc.value.code == 'INVALID_BIOMASS'

    def test_non_decreasing_in_biomass(self):
        rations = [
            recommended_daily_ration_kg(Decimal(b), Decimal('100'))
            for b in range(0, 500, 7)
        ]

        assert rations == sorted(rations)

    def test_non_increasing_across_bracket_boundaries(self):
        biomass = Decimal('1000')
        rations = [
            recommended_daily_ration_kg(biomass, Decimal(w))
            for w in ('20', '20.001', '150', '150.001', '500', '500.001')
        ]

        assert rations == sorted(rations, reverse=True)


class TestPerMealAndBags:

    def test_default_three_meals(self):
        assert per_meal_ration_kg(Decimal('3')) == Decimal('1')

    def test_configured_meals(self, settings):
        settings.FEEDMAN = {'MEALS_PER_DAY': 2}

        assert per_meal_ration_kg(Decimal('3')) == Decimal('1.5')

    @pytest.mark.parametrize('meals', [0, -2])
    def test_invalid_meals(self, meals):
        with pytest.raises(DosingError) as exc:
            per_meal_ration_kg(Decimal('3'), meals)

        assert exc.value.code == 'INVALID_MEALS'

    def test_bag_breakdown(self):
        assert bag_breakdown(Decimal('95')) == (2, Decimal('15'))

    def test_bag_breakdown_less_than_a_bag(self):
        assert bag_breakdown(Decimal('2.5')) == (0, Decimal('2.5'))

    def test_bag_breakdown_custom_size(self):
        assert bag_breakdown(Decimal('50'), bag_size_kg=25) == (2, Decimal('0'))

    def test_ration_for(self):
        ration = ration_for(Decimal('50'), Decimal('100'))

        assert ration.rate == Decimal('0.05')
        assert ration.rate_percent == Decimal('5')
        assert ration.daily_kg == Decimal('2.5')
        assert ration.meals_per_day == 3
        assert ration.per_meal_kg * 3 == pytest.approx(Decimal('2.5'))
        assert (ration.bags, ration.remainder_kg) == (0, Decimal('2.5'))
