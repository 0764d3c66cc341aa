"""
Feedman Models.

Core models for feed stock and livestock:
- Warehouse: Where feed is stored (central or satellite)
- StockMovement: Immutable ledger of quantity changes
- TransferJournal: Progress of two-warehouse transfers
- Pond / FishBatch: Fish population and average weight
- BiometrySample / MortalityRecord / FeedingEvent: Append-only records
"""

from feedman.models.batch import FishBatch
from feedman.models.enums import BatchStatus, MovementKind, TransferStatus, WarehouseKind
from feedman.models.movement import StockMovement
from feedman.models.pond import Pond
from feedman.models.records import BiometrySample, FeedingEvent, MortalityRecord
from feedman.models.transfer import TransferJournal
from feedman.models.warehouse import Warehouse

__all__ = [
    'WarehouseKind',
    'MovementKind',
    'TransferStatus',
    'BatchStatus',
    'Warehouse',
    'StockMovement',
    'TransferJournal',
    'Pond',
    'FishBatch',
    'BiometrySample',
    'MortalityRecord',
    'FeedingEvent',
]
