"""
Feedman Adapters.

Loads the configured WarehouseStore.

Usage:
    from feedman.adapters import get_warehouse_store

    store = get_warehouse_store()
    store.compare_and_set_quantity(bodega.pk, Decimal('100'), Decimal('70'))

Settings:
    FEEDMAN = {
        "WAREHOUSE_STORE": "feedman.adapters.orm.OrmWarehouseStore",
    }
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from feedman.conf import feedman_settings
from feedman.protocols.store import WarehouseStore

logger = logging.getLogger(__name__)


# Cached store instance
_lock = threading.Lock()
_warehouse_store: WarehouseStore | None = None


def get_warehouse_store() -> WarehouseStore:
    """
    Return the configured warehouse store.

    Raises:
        ImproperlyConfigured: If WAREHOUSE_STORE is empty or import fails
    """
    global _warehouse_store

    if _warehouse_store is None:
        with _lock:
            if _warehouse_store is None:  # double-checked
                store_path = feedman_settings.WAREHOUSE_STORE

                if not store_path:
                    raise ImproperlyConfigured(
                        "FEEDMAN['WAREHOUSE_STORE'] must be configured. "
                        "Example: 'feedman.adapters.orm.OrmWarehouseStore'"
                    )

                try:
                    store_class = import_string(store_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import warehouse store '{store_path}': {e}"
                    ) from e

                store = store_class()
                if not isinstance(store, WarehouseStore):
                    raise ImproperlyConfigured(
                        f"'{store_path}' does not implement WarehouseStore"
                    )
                _warehouse_store = store
                logger.debug("Loaded warehouse store: %s", store_path)

    return _warehouse_store


def reset_warehouse_store() -> None:
    """Reset the cached store. Useful for testing."""
    global _warehouse_store
    _warehouse_store = None


__all__ = [
    "get_warehouse_store",
    "reset_warehouse_store",
]
