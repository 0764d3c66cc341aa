"""
Warehouse Store Protocol — the single mutation primitive for feed quantities.

The ledger never writes a quantity directly. It reads a snapshot and asks the
store to swap the old value for the new one; if another writer got there
first the store answers CONFLICT and the ledger re-reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable


class CasOutcome(str, Enum):
    """Resultado de um compare-and-set."""

    OK = "ok"
    CONFLICT = "conflict"  # Valor armazenado mudou desde a leitura
    NOT_FOUND = "not_found"
    INVALID_QUANTITY = "invalid_quantity"  # Novo valor negativo, nada foi escrito


@dataclass(frozen=True)
class WarehouseSnapshot:
    """Point-in-time view of one warehouse."""

    id: int
    code: str
    name: str
    kind: str
    unit: str
    quantity: Decimal
    parent_id: int | None = None


@runtime_checkable
class WarehouseStore(Protocol):
    """
    Protocol for warehouse quantity storage.

    Implementations must make compare_and_set_quantity atomic with respect
    to every other writer of the same warehouse.
    """

    def get(self, warehouse_id: int) -> WarehouseSnapshot | None:
        """
        Read one warehouse.

        Returns:
            WarehouseSnapshot, or None if it does not exist
        """
        ...

    def compare_and_set_quantity(
        self,
        warehouse_id: int,
        expected: Decimal,
        new: Decimal,
    ) -> CasOutcome:
        """
        Set quantity to ``new`` only if it still equals ``expected``.

        Returns:
            CasOutcome.INVALID_QUANTITY if new < 0 (nothing written),
            CasOutcome.OK, CONFLICT or NOT_FOUND otherwise
        """
        ...
