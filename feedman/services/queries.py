"""
Feed and livestock queries — read-only operations.

All methods are classmethods and use no locking.
"""

from decimal import Decimal

from django.db.models import Case, IntegerField, Sum, Value, When
from django.db.models.functions import Coalesce

from feedman.models.enums import WarehouseKind
from feedman.models.records import BiometrySample, FeedingEvent, MortalityRecord
from feedman.models.warehouse import Warehouse


class FeedQueries:
    """Read-only query methods for screens and reports."""

    @classmethod
    def list_warehouses(cls, kind: str | None = None, farm_ref: str | None = None,
                        include_empty: bool = True):
        """
        Warehouses, central ones first, then by name.

        Args:
            kind: WarehouseKind filter (None = all)
            farm_ref: Farm filter (None = all)
            include_empty: Include warehouses with zero quantity
        """
        qs = Warehouse.objects.all()

        if kind is not None:
            qs = qs.filter(kind=kind)
        if farm_ref is not None:
            qs = qs.for_farm(farm_ref)
        if not include_empty:
            qs = qs.with_stock()

        return qs.annotate(
            _kind_order=Case(
                When(kind=WarehouseKind.GLOBAL, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by('_kind_order', 'name')

    @classmethod
    def satellites_of(cls, global_id):
        """Satellite warehouses replenished from a central one."""
        return Warehouse.objects.satellites().filter(parent_id=global_id).order_by('name')

    @classmethod
    def total_quantity(cls, warehouse_ids=None) -> Decimal:
        """Sum of balances (all warehouses, or the given ones)."""
        qs = Warehouse.objects.all()
        if warehouse_ids is not None:
            qs = qs.filter(pk__in=list(warehouse_ids))
        return qs.aggregate(t=Coalesce(Sum('_quantity'), Decimal('0')))['t']

    @classmethod
    def pond_activity(cls, pond_id, limit: int = 10) -> list[dict]:
        """
        Latest mortality, feeding and biometry records of a pond, newest first.

        Returns:
            List of {'type', 'timestamp', 'record'} dicts
        """
        entries = []
        sources = (
            ('mortality', MortalityRecord),
            ('feeding', FeedingEvent),
            ('biometry', BiometrySample),
        )
        for kind, model in sources:
            for record in model.objects.filter(pond_id=pond_id).order_by('-timestamp', '-pk')[:limit]:
                entries.append({'type': kind, 'timestamp': record.timestamp, 'record': record})

        entries.sort(key=lambda entry: entry['timestamp'], reverse=True)
        return entries[:limit]
