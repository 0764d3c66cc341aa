"""
Feedman configuration.

Usage in settings.py:
    FEEDMAN = {
        "WAREHOUSE_STORE": "feedman.adapters.orm.OrmWarehouseStore",
        "CAS_MAX_RETRIES": 5,
        "MEALS_PER_DAY": 3,
        "BAG_SIZE_KG": 40,
        "FEEDING_RATE_TABLE": [[20, "0.08"], [150, "0.05"], [500, "0.03"], [None, "0.015"]],
    }
"""

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


def _default_rate_table() -> list:
    # (max average weight in grams, inclusive | None = no limit, fraction of biomass per day)
    return [
        [20, '0.08'],
        [150, '0.05'],
        [500, '0.03'],
        [None, '0.015'],
    ]


@dataclass
class FeedmanSettings:
    """Feedman configuration settings."""

    # Warehouse store backend (dotted path)
    WAREHOUSE_STORE: str = "feedman.adapters.orm.OrmWarehouseStore"

    # Compare-and-set attempts per step before giving up with CONTENTION
    CAS_MAX_RETRIES: int = 5

    # Feedings per day used to split the daily ration
    MEALS_PER_DAY: int = 3

    # Feed bag size for the bag breakdown
    BAG_SIZE_KG: int = 40

    # Weight-bracketed feeding rates, ordered by weight
    FEEDING_RATE_TABLE: list = field(default_factory=_default_rate_table)

    # Default page size for ledger history
    HISTORY_PAGE_SIZE: int = 50

    # Journals untouched for longer than this are considered stuck
    RECONCILE_AFTER_SECONDS: int = 300


def get_feedman_settings() -> FeedmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "FEEDMAN", {})
    return FeedmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in FeedmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_feedman_settings(), name)


feedman_settings = _LazySettings()
