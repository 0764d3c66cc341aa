"""
Tests for numeric input coercion.
"""

from decimal import Decimal

import pytest

from feedman.quantities import QUANTITY_PLACES, to_decimal


class TestToDecimal:

    @pytest.mark.parametrize('value, expected', [
        ('12.5', Decimal('12.5')),
        (3, Decimal('3')),
        (0.25, Decimal('0.25')),
        (Decimal('-1.250'), Decimal('-1.250')),
    ])
    def test_numbers(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize('value', [None, True, 'abc', '', 'NaN', 'Infinity', float('nan'), float('inf')])
    def test_not_a_finite_number(self, value):
        assert to_decimal(value) is None

    def test_places_limit(self):
        assert to_decimal(Decimal('0.0004'), QUANTITY_PLACES) is None
        assert to_decimal('1.2345', QUANTITY_PLACES) is None
        assert to_decimal(Decimal('2.5000'), QUANTITY_PLACES) == Decimal('2.500')
        assert to_decimal('7', QUANTITY_PLACES) == Decimal('7.000')

    def test_too_many_digits(self):
        assert to_decimal(Decimal('1E+40'), QUANTITY_PLACES) is None
