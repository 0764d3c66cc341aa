"""
Feedman services — modular organization of feed and livestock operations.

    from feedman.services import StockLedger, Livestock, FeedingOrchestrator, FeedQueries
"""

from feedman.services.feeding import FeedingOrchestrator
from feedman.services.ledger import StockLedger
from feedman.services.livestock import Livestock
from feedman.services.queries import FeedQueries

__all__ = [
    'StockLedger',
    'Livestock',
    'FeedingOrchestrator',
    'FeedQueries',
]
