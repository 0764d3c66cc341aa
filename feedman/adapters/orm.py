"""
ORM Warehouse Store — compare-and-set over the Django ORM.

The swap is one conditional UPDATE:

    UPDATE feedman_warehouse SET _quantity = :new
     WHERE id = :id AND _quantity = :expected

One row affected = OK. Zero rows = CONFLICT if the warehouse exists,
NOT_FOUND otherwise. The database check constraint rejects negative values
even if a caller skipped the pre-check.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from feedman.models.warehouse import Warehouse
from feedman.protocols.store import CasOutcome, WarehouseSnapshot

logger = logging.getLogger(__name__)


def snapshot_of(warehouse: Warehouse) -> WarehouseSnapshot:
    return WarehouseSnapshot(
        id=warehouse.pk,
        code=warehouse.code,
        name=warehouse.name,
        kind=warehouse.kind,
        unit=warehouse.unit,
        quantity=warehouse._quantity,
        parent_id=warehouse.parent_id,
    )


class OrmWarehouseStore:
    """Default ``WarehouseStore`` backed by the Warehouse model."""

    def get(self, warehouse_id: int) -> WarehouseSnapshot | None:
        warehouse = Warehouse.objects.filter(pk=warehouse_id).first()
        if warehouse is None:
            return None
        return snapshot_of(warehouse)

    def compare_and_set_quantity(
        self,
        warehouse_id: int,
        expected: Decimal,
        new: Decimal,
    ) -> CasOutcome:
        if new < 0:
            return CasOutcome.INVALID_QUANTITY

        try:
            with transaction.atomic():
                updated = Warehouse.objects.filter(
                    pk=warehouse_id,
                    _quantity=expected,
                ).update(_quantity=new, updated_at=timezone.now())
        except IntegrityError:
            logger.warning(
                "store.cas.rejected",
                extra={"warehouse_id": warehouse_id, "new": str(new)},
            )
            return CasOutcome.INVALID_QUANTITY

        if updated == 1:
            return CasOutcome.OK
        if Warehouse.objects.filter(pk=warehouse_id).exists():
            return CasOutcome.CONFLICT
        return CasOutcome.NOT_FOUND
