"""
Exceptions for Feedman.

All errors carry a structured code for programmatic handling. Ledger and
livestock operations return them inside result objects; ``unwrap()`` raises.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Structured error: code + human-readable message + context data.

    Subclasses provide ``_default_messages`` keyed by code.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        """Only transient concurrency conflicts are worth retrying."""
        return self.code == 'CONTENTION'

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


class StockError(BaseError):
    """
    Structured error for ledger operations.

    Usage:
        result = ledger.consume(bodega.pk, Decimal('15'), actor='op-1')
        if not result.ok and result.error.code == 'INSUFFICIENT_STOCK':
            print(f"Só tem {result.error.available} kg disponível")
    """

    _default_messages = {
        'NOT_FOUND': 'Depósito não encontrado',
        'INVALID_AMOUNT': 'Quantidade inválida (deve ser positiva e entre depósitos diferentes)',
        'INVALID_QUANTITY': 'O saldo resultante não pode ser negativo',
        'REASON_REQUIRED': 'Motivo é obrigatório',
        'INVALID_WAREHOUSE': 'Dados do depósito inválidos',
        'INSUFFICIENT_STOCK': 'Ração insuficiente no depósito de origem',
        'CONTENTION': 'Outro operador alterou este estoque agora. Tente novamente.',
        'PARTIALLY_APPLIED': 'Transferência aplicada parcialmente',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))


class LivestockError(BaseError):
    """Structured error for pond/batch operations."""

    _default_messages = {
        'NOT_FOUND': 'Viveiro não encontrado',
        'NO_ACTIVE_BATCH': 'Nenhum lote ativo neste viveiro',
        'BATCH_ALREADY_ACTIVE': 'Já existe um lote ativo neste viveiro',
        'INVALID_INPUT': 'Dados inválidos (valores devem ser positivos)',
        'INSUFFICIENT_POPULATION': 'Não é possível registrar mais baixas do que peixes no viveiro',
        'CONTENTION': 'Outro operador alterou este viveiro agora. Tente novamente.',
    }

    @property
    def population(self) -> int:
        """Shortcut for data['population']."""
        return self.data.get('population', 0)


class DosingError(BaseError, ValueError):
    """Precondition violation in the dosing calculation."""

    _default_messages = {
        'INVALID_WEIGHT': 'Peso médio ausente ou negativo',
        'INVALID_BIOMASS': 'Biomassa não pode ser negativa',
        'INVALID_MEALS': 'Número de tratos diários deve ser positivo',
    }
