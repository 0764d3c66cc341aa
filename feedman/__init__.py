"""
Django Feedman — Estoque de ração e arraçoamento por biomassa.

Uso:
    from feedman import ledger, livestock, feeding

    ledger.transfer(central.pk, satelite.pk, Decimal('30'), actor='op-1')
    livestock.record_biometry(viveiro.pk, Decimal('100'), 30)
    feeding.recommend(viveiro.pk).ration.daily_kg
    feeding.record_feeding(viveiro.pk, Decimal('2.5'), actor='op-2')
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from feedman.services.ledger import ledger
        return ledger
    elif name == 'livestock':
        from feedman.services.livestock import livestock
        return livestock
    elif name == 'feeding':
        from feedman.services.feeding import feeding
        return feeding
    elif name == 'queries':
        from feedman.services.queries import FeedQueries
        return FeedQueries
    elif name == 'StockError':
        from feedman.exceptions import StockError
        return StockError
    elif name == 'LivestockError':
        from feedman.exceptions import LivestockError
        return LivestockError
    elif name == 'DosingError':
        from feedman.exceptions import DosingError
        return DosingError
    elif name == 'Warehouse':
        from feedman.models.warehouse import Warehouse
        return Warehouse
    elif name == 'StockMovement':
        from feedman.models.movement import StockMovement
        return StockMovement
    elif name == 'Pond':
        from feedman.models.pond import Pond
        return Pond
    elif name == 'FishBatch':
        from feedman.models.batch import FishBatch
        return FishBatch
    elif name == 'WarehouseKind':
        from feedman.models.enums import WarehouseKind
        return WarehouseKind
    elif name == 'MovementKind':
        from feedman.models.enums import MovementKind
        return MovementKind
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'livestock',
    'feeding',
    'queries',
    'StockError',
    'LivestockError',
    'DosingError',
    'Warehouse',
    'StockMovement',
    'Pond',
    'FishBatch',
    'WarehouseKind',
    'MovementKind',
]

__version__ = '0.1.0'
