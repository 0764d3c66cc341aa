"""
TransferJournal model — durable progress of a two-warehouse transfer.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from feedman.models.enums import TransferStatus


class TransferJournalQuerySet(models.QuerySet):

    def pending(self):
        """Transfers that have not reached a terminal state."""
        return self.filter(status__in=[TransferStatus.STARTED, TransferStatus.SOURCE_UPDATED])

    def stale(self, before):
        """Pending transfers not touched since ``before``."""
        return self.pending().filter(updated_at__lt=before).order_by('pk')


class TransferJournal(models.Model):
    """
    One row per transfer attempt.

    The source debit and the destination credit are two separate
    compare-and-set writes on two rows, so a transfer can be interrupted
    between them. The journal makes that visible:

        SOURCE_UPDATED without a movement = source debited, destination not credited

    The ledger resolves it before returning; ``reconcile_transfers`` resolves
    rows left behind by a crashed process.
    """

    source = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Origem'),
    )
    destination = models.ForeignKey(
        'feedman.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Destino'),
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    actor = models.CharField(max_length=128, verbose_name=_('Operador'))
    note = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Observação'))
    status = models.CharField(
        max_length=20,
        choices=TransferStatus.choices,
        default=TransferStatus.STARTED,
        db_index=True,
        verbose_name=_('Status'),
    )
    attempts = models.PositiveIntegerField(default=0, verbose_name=_('Tentativas'))
    movement = models.OneToOneField(
        'feedman.StockMovement',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='journal',
        verbose_name=_('Movimento'),
    )
    detail = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Detalhe'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TransferJournalQuerySet.as_manager()

    class Meta:
        verbose_name = _('Transferência')
        verbose_name_plural = _('Transferências')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'updated_at'], name='transfer_status_updated_idx'),
        ]

    def advance(self, expected, status, detail: str = '', **fields) -> bool:
        """
        Move from ``expected`` to ``status`` with one conditional UPDATE.

        Returns False (and changes nothing) if another process already moved
        the row out of ``expected``. Call it in the same transaction as the
        quantity change it records, and roll that change back on False.
        """
        values = {'status': status, 'updated_at': timezone.now(), **fields}
        if detail:
            values['detail'] = detail[:255]
        moved = TransferJournal.objects.filter(pk=self.pk, status=expected).update(**values)
        if not moved:
            return False
        for name, value in values.items():
            setattr(self, name, value)
        return True

    def __str__(self) -> str:
        return f"transfer:{self.pk} {self.amount} [{self.source_id} → {self.destination_id}] {self.status}"
