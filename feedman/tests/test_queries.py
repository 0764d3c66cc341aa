"""
Tests for read-only feed queries.
"""

from decimal import Decimal

import pytest

from feedman import feeding, ledger, livestock
from feedman.models import WarehouseKind
from feedman.services.queries import FeedQueries


pytestmark = pytest.mark.django_db


class TestWarehouseQueries:

    def test_globals_listed_first(self, central, satellite, other_satellite):
        extra = ledger.register_warehouse('auxiliar', 'Ração Auxiliar', actor='setup').unwrap().warehouse

        codes = [w.code for w in FeedQueries.list_warehouses()]

        assert codes == ['central', 'auxiliar', 'satelite-norte', 'satelite-sul']
        assert extra.kind == WarehouseKind.GLOBAL

    def test_filters(self, central, satellite, other_satellite):
        ledger.transfer(central.pk, satellite.pk, Decimal('5'), actor='op-1')

        satellites = FeedQueries.list_warehouses(kind=WarehouseKind.SATELLITE)
        stocked = FeedQueries.list_warehouses(include_empty=False)

        assert [w.code for w in satellites] == ['satelite-norte', 'satelite-sul']
        assert [w.code for w in stocked] == ['central', 'satelite-norte']
        assert list(FeedQueries.list_warehouses(farm_ref='fazenda-x')) == []

    def test_satellites_of(self, central, satellite, other_satellite):
        assert list(FeedQueries.satellites_of(central.pk)) == [satellite, other_satellite]
        assert list(FeedQueries.satellites_of(satellite.pk)) == []

    def test_total_quantity(self, central, satellite):
        ledger.transfer(central.pk, satellite.pk, Decimal('30'), actor='op-1')

        assert FeedQueries.total_quantity() == Decimal('100')
        assert FeedQueries.total_quantity([satellite.pk]) == Decimal('30')
        assert FeedQueries.total_quantity([]) == Decimal('0')


class TestPondActivity:

    def test_merged_timeline(self, stocked_pond, central, satellite):
        ledger.transfer(central.pk, satellite.pk, Decimal('10'), actor='setup')
        livestock.record_mortality(stocked_pond.pk, 3, cause='Predador')
        feeding.record_feeding(stocked_pond.pk, Decimal('1'), actor='op-2')
        livestock.record_biometry(stocked_pond.pk, Decimal('110'), 20)

        activity = FeedQueries.pond_activity(stocked_pond.pk)

        assert [entry['type'] for entry in activity] == ['biometry', 'feeding', 'mortality']
        assert activity[2]['record'].cause == 'Predador'

    def test_limit(self, stocked_pond):
        for _ in range(4):
            livestock.record_mortality(stocked_pond.pk, 1)

        assert len(FeedQueries.pond_activity(stocked_pond.pk, limit=3)) == 3

    def test_empty_pond(self, pond):
        assert FeedQueries.pond_activity(pond.pk) == []
