"""
Enums for Feedman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class WarehouseKind(models.TextChoices):
    """
    Role of a warehouse in the feed distribution chain.

    GLOBAL:    Central store, receives feed from suppliers.
    SATELLITE: Field distribution point next to the ponds,
               replenished from one GLOBAL warehouse.
    """
    GLOBAL = 'global', _('Central')
    SATELLITE = 'satellite', _('Satélite')


class MovementKind(models.TextChoices):
    """Kind of quantity change recorded in the ledger."""
    TRANSFER = 'transfer', _('Transferência')
    CONSUMPTION = 'consumption', _('Consumo')
    ADJUSTMENT = 'adjustment', _('Ajuste')


class TransferStatus(models.TextChoices):
    """
    Transfer state machine.

    STARTED → SOURCE_UPDATED → COMPLETED
                    │
                    └──────→ COMPENSATED  (destination could not be credited)

    STARTED → FAILED  (validation, insufficient stock or contention on source)
    """
    STARTED = 'started', _('Iniciada')
    SOURCE_UPDATED = 'source_updated', _('Origem debitada')
    COMPLETED = 'completed', _('Concluída')
    COMPENSATED = 'compensated', _('Estornada')
    FAILED = 'failed', _('Falhou')


class BatchStatus(models.TextChoices):
    """Fish batch lifecycle status."""
    ACTIVE = 'active', _('Ativo')
    CLOSED = 'closed', _('Encerrado')
