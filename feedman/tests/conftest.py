"""
Pytest fixtures for Feedman tests.
"""

from decimal import Decimal

import pytest

from feedman import ledger, livestock
from feedman.adapters import reset_warehouse_store
from feedman.adapters.orm import OrmWarehouseStore
from feedman.models import Pond, WarehouseKind
from feedman.protocols.store import CasOutcome


class FlakyStore(OrmWarehouseStore):
    """
    ORM store that answers CONFLICT for one warehouse.

    ``failures`` = how many compare-and-sets fail (None = all of them).
    """

    def __init__(self, warehouse_id, failures=None):
        self.warehouse_id = warehouse_id
        self.failures = failures
        self.calls = 0

    def compare_and_set_quantity(self, warehouse_id, expected, new):
        if warehouse_id == self.warehouse_id:
            self.calls += 1
            if self.failures is None or self.calls <= self.failures:
                return CasOutcome.CONFLICT
        return super().compare_and_set_quantity(warehouse_id, expected, new)


class RacingStore(OrmWarehouseStore):
    """
    ORM store that lets a competing writer in right before the first
    compare-and-set on ``warehouse_id``, so that swap sees a stale value.
    """

    def __init__(self, warehouse_id, competitor):
        self.warehouse_id = warehouse_id
        self.competitor = competitor
        self.raced = False

    def compare_and_set_quantity(self, warehouse_id, expected, new):
        if warehouse_id == self.warehouse_id and not self.raced:
            self.raced = True
            self.competitor()
        return super().compare_and_set_quantity(warehouse_id, expected, new)


@pytest.fixture(autouse=True)
def fresh_store():
    """Each test loads the configured store from its own settings."""
    reset_warehouse_store()
    yield
    reset_warehouse_store()


@pytest.fixture
def central(db):
    """GLOBAL warehouse holding 100 kg."""
    return ledger.register_warehouse(
        'central', 'Depósito Central', actor='setup',
        opening_quantity=Decimal('100'),
    ).unwrap().warehouse


@pytest.fixture
def satellite(db, central):
    """Empty SATELLITE warehouse replenished from central."""
    return ledger.register_warehouse(
        'satelite-norte', 'Satélite Norte', actor='setup',
        kind=WarehouseKind.SATELLITE, parent_id=central.pk,
    ).unwrap().warehouse


@pytest.fixture
def other_satellite(db, central):
    """Second empty SATELLITE under central."""
    return ledger.register_warehouse(
        'satelite-sul', 'Satélite Sul', actor='setup',
        kind=WarehouseKind.SATELLITE, parent_id=central.pk,
    ).unwrap().warehouse


@pytest.fixture
def pond(db, satellite):
    """Empty pond fed from the north satellite."""
    return Pond.objects.create(name='Viveiro 1', warehouse=satellite, area_m2=Decimal('1200'))


@pytest.fixture
def stocked_pond(pond):
    """Pond with 500 tilapia averaging 100 g (50 kg biomass)."""
    livestock.stock_pond(pond.pk, 'Tilápia', 500, Decimal('100'), actor='setup').unwrap()
    pond.refresh_from_db()
    return pond


@pytest.fixture
def flaky_store():
    return FlakyStore


@pytest.fixture
def racing_store():
    return RacingStore
