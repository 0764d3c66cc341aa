"""
Feedman Protocols.

Defines interfaces for persistence backends.
"""

from feedman.protocols.store import (
    CasOutcome,
    WarehouseSnapshot,
    WarehouseStore,
)

__all__ = [
    "CasOutcome",
    "WarehouseSnapshot",
    "WarehouseStore",
]
