"""
Stock ledger — transfer, consume and adjust feed quantities.

Every quantity change is:
1. a compare-and-set on the warehouse store (optimistic, bounded retry)
2. an immutable StockMovement, written in the same DB transaction

Transfers touch two warehouses with two separate compare-and-sets and are
tracked by a TransferJournal:

    STARTED ──debit source──► SOURCE_UPDATED ──credit destination──► COMPLETED
                                     │
                                     └──credit source back──► COMPENSATED

Only COMPLETED transfers write a TRANSFER movement, so the movement history
always matches the balances.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Callable

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from feedman.adapters import get_warehouse_store
from feedman.conf import feedman_settings
from feedman.exceptions import StockError
from feedman.models.enums import MovementKind, TransferStatus, WarehouseKind
from feedman.models.movement import StockMovement
from feedman.models.transfer import TransferJournal
from feedman.models.warehouse import Warehouse
from feedman.protocols.store import CasOutcome, WarehouseSnapshot, WarehouseStore
from feedman.quantities import QUANTITY_PLACES, to_decimal
from feedman.results import AdjustResult, ConsumeResult, Drift, RegisterResult, TransferResult

logger = logging.getLogger('feedman')


class _Superseded(Exception):
    """The journal left the expected status; roll back the quantity change."""


@dataclass(frozen=True)
class _Applied:
    """Outcome of one guarded quantity change (internal)."""

    outcome: CasOutcome
    before: WarehouseSnapshot | None = None
    after: WarehouseSnapshot | None = None
    attempts: int = 0
    records: object = None
    superseded: bool = False


class StockLedger:
    """
    Single interface for feed quantity changes.

    Usage:
        from feedman import ledger

        ledger.transfer(central.pk, satelite.pk, Decimal('30'), actor='op-1')
        ledger.consume(satelite.pk, Decimal('12.5'), actor='op-2', note='Viveiro 3')
        ledger.adjust(satelite.pk, Decimal('-0.5'), actor='op-1', note='Saco rasgado')
        ledger.history(satelite.pk, limit=20)
    """

    def __init__(self, store: WarehouseStore | None = None):
        self._store = store

    @property
    def store(self) -> WarehouseStore:
        return self._store if self._store is not None else get_warehouse_store()

    # ══════════════════════════════════════════════════════════════
    # CORE: MOVEMENTS
    # ══════════════════════════════════════════════════════════════

    def transfer(self, source_id, destination_id, amount, actor, note: str = '') -> TransferResult:
        """
        Move ``amount`` from one warehouse to another.

        Failures (in result.error.code):
            INVALID_AMOUNT: amount <= 0 or source == destination
            NOT_FOUND: either warehouse missing
            INSUFFICIENT_STOCK: source holds less than amount (nothing changed)
            CONTENTION: concurrent writers kept winning; retry the whole action

        On success the sum of both balances is unchanged and exactly one
        TRANSFER movement exists for this transfer.
        """
        amount = to_decimal(amount, QUANTITY_PLACES)
        if amount is None or amount <= 0 or source_id == destination_id:
            return TransferResult(error=StockError(
                'INVALID_AMOUNT', requested=amount,
                source=source_id, destination=destination_id,
            ))

        store = self.store
        for warehouse_id in (source_id, destination_id):
            if store.get(warehouse_id) is None:
                return TransferResult(error=StockError('NOT_FOUND', warehouse_id=warehouse_id))

        journal = TransferJournal.objects.create(
            source_id=source_id,
            destination_id=destination_id,
            amount=amount,
            actor=actor,
            note=note,
        )

        # Step 1: debit source (journal moves to SOURCE_UPDATED in the same transaction)
        def debited(before, attempts):
            if not journal.advance(TransferStatus.STARTED, TransferStatus.SOURCE_UPDATED, attempts=attempts):
                raise _Superseded

        debit = self._apply(source_id, -amount, on_success=debited)
        if debit.superseded:
            # Reconciled as abandoned while we were debiting
            journal.refresh_from_db()
            return TransferResult(
                error=StockError('CONTENTION', journal_id=journal.pk, source=source_id),
                journal=journal,
                attempts=debit.attempts,
            )
        if debit.outcome is not CasOutcome.OK:
            error = self._source_error(debit, source_id, amount)
            if not journal.advance(TransferStatus.STARTED, TransferStatus.FAILED,
                                   detail=error.code, attempts=debit.attempts):
                journal.refresh_from_db()
            if error.code == 'CONTENTION':
                logger.warning(
                    "ledger.transfer.contention",
                    extra={"journal_id": journal.pk, "source": source_id, "attempts": debit.attempts},
                )
            return TransferResult(error=error, journal=journal, attempts=debit.attempts)

        # Step 2: credit destination (movement + COMPLETED in the same transaction)
        def complete(before, attempts):
            movement = StockMovement.objects.create(
                kind=MovementKind.TRANSFER,
                source_id=source_id,
                destination_id=destination_id,
                amount=amount,
                actor=actor,
                note=note,
                metadata={'journal_id': journal.pk},
            )
            completed = journal.advance(
                TransferStatus.SOURCE_UPDATED,
                TransferStatus.COMPLETED,
                movement=movement,
                attempts=debit.attempts + attempts,
            )
            if not completed:
                raise _Superseded
            return movement

        credit = self._apply(destination_id, amount, on_success=complete)
        if credit.superseded:
            # Another process already refunded the source
            logger.warning(
                "ledger.transfer.superseded",
                extra={"journal_id": journal.pk, "destination": destination_id},
            )
            journal.refresh_from_db()
            return TransferResult(
                error=StockError(
                    'CONTENTION',
                    journal_id=journal.pk,
                    source=source_id,
                    destination=destination_id,
                ),
                journal=journal,
                attempts=debit.attempts + credit.attempts,
            )
        if credit.outcome is CasOutcome.OK:
            logger.info(
                "ledger.transfer",
                extra={
                    "journal_id": journal.pk,
                    "source": source_id,
                    "destination": destination_id,
                    "qty": str(amount),
                    "actor": actor,
                },
            )
            return TransferResult(
                source=store.get(source_id),
                destination=credit.after,
                movement=credit.records,
                journal=journal,
                attempts=debit.attempts + credit.attempts,
            )

        # Source debited, destination not credited
        partial = StockError(
            'PARTIALLY_APPLIED',
            journal_id=journal.pk,
            destination_outcome=credit.outcome.value,
        )
        return self._resolve_partial(journal, partial)

    def consume(self, warehouse_id, amount, actor, note: str = '') -> ConsumeResult:
        """
        Remove ``amount`` from a warehouse (fish ate it).

        Never removes more than requested; fails with no change when the
        warehouse holds less than ``amount``.

        Failures: INVALID_AMOUNT, NOT_FOUND, INSUFFICIENT_STOCK, CONTENTION
        """
        amount = to_decimal(amount, QUANTITY_PLACES)
        if amount is None or amount <= 0:
            return ConsumeResult(error=StockError('INVALID_AMOUNT', requested=amount))

        def record(before, attempts):
            return StockMovement.objects.create(
                kind=MovementKind.CONSUMPTION,
                source_id=warehouse_id,
                amount=amount,
                actor=actor,
                note=note,
            )

        applied = self._apply(warehouse_id, -amount, on_success=record)
        if applied.outcome is not CasOutcome.OK:
            error = self._source_error(applied, warehouse_id, amount)
            if error.code == 'CONTENTION':
                logger.warning(
                    "ledger.consume.contention",
                    extra={"warehouse_id": warehouse_id, "attempts": applied.attempts},
                )
            return ConsumeResult(error=error, attempts=applied.attempts)

        logger.info(
            "ledger.consume",
            extra={
                "warehouse_id": warehouse_id,
                "qty": str(amount),
                "actor": actor,
                "movement_id": applied.records.pk,
            },
        )
        return ConsumeResult(
            warehouse=applied.after,
            movement=applied.records,
            attempts=applied.attempts,
        )

    def adjust(self, warehouse_id, delta, actor, note: str) -> AdjustResult:
        """
        Manual correction (count after inventory, torn bags, supplier delivery).

        Failures:
            REASON_REQUIRED: empty note
            INVALID_AMOUNT: delta is zero or not a number
            INVALID_QUANTITY: balance would become negative
            NOT_FOUND, CONTENTION
        """
        if not note:
            return AdjustResult(error=StockError('REASON_REQUIRED'))

        delta = to_decimal(delta, QUANTITY_PLACES)
        if delta is None or delta == 0:
            return AdjustResult(error=StockError('INVALID_AMOUNT', requested=delta))

        def record(before, attempts):
            return StockMovement.objects.create(
                kind=MovementKind.ADJUSTMENT,
                source_id=warehouse_id if delta < 0 else None,
                destination_id=warehouse_id if delta > 0 else None,
                amount=abs(delta),
                actor=actor,
                note=note,
            )

        applied = self._apply(warehouse_id, delta, on_success=record)
        if applied.outcome is CasOutcome.NOT_FOUND:
            return AdjustResult(error=StockError('NOT_FOUND', warehouse_id=warehouse_id))
        if applied.outcome is CasOutcome.INVALID_QUANTITY:
            return AdjustResult(error=StockError(
                'INVALID_QUANTITY',
                available=applied.before.quantity,
                requested=delta,
            ))
        if applied.outcome is CasOutcome.CONFLICT:
            logger.warning(
                "ledger.adjust.contention",
                extra={"warehouse_id": warehouse_id, "attempts": applied.attempts},
            )
            return AdjustResult(error=StockError('CONTENTION', warehouse_id=warehouse_id),
                                attempts=applied.attempts)

        logger.info(
            "ledger.adjust",
            extra={
                "warehouse_id": warehouse_id,
                "delta": str(delta),
                "actor": actor,
                "note": note,
            },
        )
        return AdjustResult(warehouse=applied.after, movement=applied.records, attempts=applied.attempts)

    # ══════════════════════════════════════════════════════════════
    # CORE: QUERIES
    # ══════════════════════════════════════════════════════════════

    def history(self, warehouse_id, limit: int | None = None, before: int | None = None):
        """
        Movements touching a warehouse, newest first.

        Args:
            warehouse_id: Warehouse pk
            limit: Page size (None = HISTORY_PAGE_SIZE)
            before: Cursor — only movements with pk < before

        Returns:
            Lazy QuerySet. Pass the last movement's pk as ``before`` for the next page.
        """
        if limit is None:
            limit = feedman_settings.HISTORY_PAGE_SIZE
        qs = StockMovement.objects.touching(warehouse_id).order_by('-pk')
        if before is not None:
            qs = qs.filter(pk__lt=before)
        return qs[:max(limit, 0)]

    def verify(self, warehouse_id) -> Drift | None:
        """
        Recompute a balance from its movements (read-only audit).

        Returns:
            Drift, or None if the warehouse doesn't exist
        """
        warehouse = Warehouse.objects.filter(pk=warehouse_id).first()
        if warehouse is None:
            return None

        incoming = StockMovement.objects.filter(destination_id=warehouse_id).aggregate(
            t=Coalesce(Sum('amount'), Decimal('0'))
        )['t']
        outgoing = StockMovement.objects.filter(source_id=warehouse_id).aggregate(
            t=Coalesce(Sum('amount'), Decimal('0'))
        )['t']

        drift = Drift(
            warehouse_id=warehouse_id,
            recorded=warehouse.quantity,
            computed=incoming - outgoing,
        )
        if not drift.consistent:
            logger.warning(
                "ledger.verify.drift",
                extra={
                    "warehouse_id": warehouse_id,
                    "recorded": str(drift.recorded),
                    "computed": str(drift.computed),
                },
            )
        return drift

    # ══════════════════════════════════════════════════════════════
    # EXTENSION: SETUP AND RECOVERY
    # ══════════════════════════════════════════════════════════════

    def register_warehouse(self, code: str, name: str, actor: str,
                           kind: str = WarehouseKind.GLOBAL, unit: str = 'kg',
                           parent_id=None, opening_quantity=0,
                           farm_ref: str = '') -> RegisterResult:
        """
        Create a warehouse, recording its opening balance as an ADJUSTMENT.

        Failures: INVALID_WAREHOUSE (parent rules, duplicate code), INVALID_QUANTITY
        """
        opening = to_decimal(opening_quantity, QUANTITY_PLACES)
        if opening is None or opening < 0:
            return RegisterResult(error=StockError('INVALID_QUANTITY', requested=opening_quantity))

        warehouse = Warehouse(
            code=code,
            name=name,
            kind=kind,
            unit=unit,
            parent_id=parent_id,
            farm_ref=farm_ref,
        )
        try:
            warehouse.full_clean()
        except ValidationError as e:
            return RegisterResult(error=StockError('INVALID_WAREHOUSE', errors=e.message_dict))

        with transaction.atomic():
            warehouse.save()
            movement = None
            if opening > 0:
                movement = self.adjust(warehouse.pk, opening, actor, note='Saldo inicial').unwrap().movement
            warehouse.refresh_from_db()

        logger.info(
            "ledger.register",
            extra={"warehouse_id": warehouse.pk, "kind": kind, "opening": str(opening)},
        )
        return RegisterResult(warehouse=warehouse, movement=movement)

    def reconcile_pending(self, older_than_seconds: int | None = None) -> dict[str, int]:
        """
        Resolve transfers a crashed process left half-way.

        STARTED: source was never debited → FAILED
        SOURCE_UPDATED: source debited, destination not credited → compensate

        Returns:
            Counts per resulting status
        """
        if older_than_seconds is None:
            older_than_seconds = feedman_settings.RECONCILE_AFTER_SECONDS
        cutoff = timezone.now() - timedelta(seconds=older_than_seconds)

        counts = {TransferStatus.FAILED.value: 0, TransferStatus.COMPENSATED.value: 0, 'pending': 0}
        for journal in TransferJournal.objects.stale(cutoff):
            if journal.status == TransferStatus.STARTED:
                if journal.advance(TransferStatus.STARTED, TransferStatus.FAILED, detail='abandoned'):
                    counts[TransferStatus.FAILED.value] += 1
                continue

            refund = self._compensate(journal, detail='compensated: reconcile')
            if refund.superseded:
                # Resolved by someone else since the list was read
                continue
            if refund.outcome is CasOutcome.OK:
                counts[TransferStatus.COMPENSATED.value] += 1
            else:
                counts['pending'] += 1
            logger.warning(
                "ledger.reconcile",
                extra={"journal_id": journal.pk, "status": journal.status, "outcome": refund.outcome.value},
            )
        return counts

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    def _apply(self, warehouse_id, delta: Decimal,
               on_success: Callable[[WarehouseSnapshot, int], object]) -> _Applied:
        """
        Read → compute → compare-and-set, retrying on CONFLICT.

        ``on_success(before, attempts)`` runs in the same transaction as the
        successful compare-and-set; its return value comes back as ``records``.
        If it raises ``_Superseded`` the compare-and-set is rolled back and the
        result is a CONFLICT with ``superseded`` set (no retry).
        A negative result is reported as INVALID_QUANTITY without writing.
        """
        store = self.store
        max_attempts = max(feedman_settings.CAS_MAX_RETRIES, 1)
        before = None

        for attempt in range(1, max_attempts + 1):
            before = store.get(warehouse_id)
            if before is None:
                return _Applied(CasOutcome.NOT_FOUND, attempts=attempt)

            new_quantity = before.quantity + delta
            if new_quantity < 0:
                return _Applied(CasOutcome.INVALID_QUANTITY, before=before, attempts=attempt)

            try:
                with transaction.atomic():
                    outcome = store.compare_and_set_quantity(warehouse_id, before.quantity, new_quantity)
                    if outcome is CasOutcome.OK:
                        records = on_success(before, attempt)
                        after = WarehouseSnapshot(
                            id=before.id,
                            code=before.code,
                            name=before.name,
                            kind=before.kind,
                            unit=before.unit,
                            quantity=new_quantity,
                            parent_id=before.parent_id,
                        )
                        return _Applied(outcome, before=before, after=after, attempts=attempt, records=records)
            except _Superseded:
                return _Applied(CasOutcome.CONFLICT, before=before, attempts=attempt, superseded=True)

            if outcome is not CasOutcome.CONFLICT:
                return _Applied(outcome, before=before, attempts=attempt)

            logger.debug(
                "ledger.cas.conflict",
                extra={"warehouse_id": warehouse_id, "attempt": attempt},
            )

        return _Applied(CasOutcome.CONFLICT, before=before, attempts=max_attempts)

    @staticmethod
    def _source_error(applied: _Applied, warehouse_id, amount: Decimal) -> StockError:
        """Map a failed debit to the caller-facing error."""
        if applied.outcome is CasOutcome.NOT_FOUND:
            return StockError('NOT_FOUND', warehouse_id=warehouse_id)
        if applied.outcome is CasOutcome.INVALID_QUANTITY:
            return StockError(
                'INSUFFICIENT_STOCK',
                warehouse_id=warehouse_id,
                available=applied.before.quantity,
                requested=amount,
            )
        return StockError('CONTENTION', warehouse_id=warehouse_id, attempts=applied.attempts)

    def _resolve_partial(self, journal: TransferJournal, partial: StockError) -> TransferResult:
        """
        Compensate a transfer whose source was debited but destination wasn't.

        The source gets the amount back (journal → COMPENSATED). If even that
        keeps conflicting, the journal stays SOURCE_UPDATED for
        ``reconcile_transfers``. Either way the caller sees CONTENTION.
        """
        logger.warning(
            "ledger.transfer.partial",
            extra={"journal_id": journal.pk, "detail": partial.data},
        )

        refund = self._compensate(journal, detail=f"compensated: {partial.data}")
        return TransferResult(
            error=StockError(
                'CONTENTION',
                journal_id=journal.pk,
                source=journal.source_id,
                destination=journal.destination_id,
            ),
            journal=journal,
            attempts=journal.attempts + refund.attempts,
        )

    def _compensate(self, journal: TransferJournal, detail: str) -> _Applied:
        """
        Credit the source back and move the journal SOURCE_UPDATED → COMPENSATED.

        Both happen in one transaction. If the journal is no longer
        SOURCE_UPDATED (completed or compensated elsewhere) the refund is
        rolled back and the result is ``superseded``.
        """
        def compensated(before, attempts):
            if not journal.advance(TransferStatus.SOURCE_UPDATED, TransferStatus.COMPENSATED, detail=detail):
                raise _Superseded

        refund = self._apply(journal.source_id, journal.amount, on_success=compensated)
        if refund.outcome is CasOutcome.OK:
            logger.warning(
                "ledger.transfer.compensated",
                extra={"journal_id": journal.pk, "source": journal.source_id, "qty": str(journal.amount)},
            )
        elif refund.superseded:
            journal.refresh_from_db()
            logger.info(
                "ledger.transfer.already_resolved",
                extra={"journal_id": journal.pk, "status": journal.status},
            )
        else:
            logger.error(
                "ledger.transfer.unresolved",
                extra={"journal_id": journal.pk, "outcome": refund.outcome.value},
            )
        return refund


ledger = StockLedger()
