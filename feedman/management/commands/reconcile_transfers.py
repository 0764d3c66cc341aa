"""
Management command to resolve transfers left half-way by a crashed process.

Usage:
    python manage.py reconcile_transfers
    python manage.py reconcile_transfers --dry-run
    python manage.py reconcile_transfers --older-than 60
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from feedman import ledger
from feedman.conf import feedman_settings
from feedman.models import TransferJournal


class Command(BaseCommand):
    """Reconcile pending transfers command."""

    help = 'Resolve transferências interrompidas (estorna a origem quando necessário)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Mostra o que seria resolvido sem executar'
        )
        parser.add_argument(
            '--older-than',
            type=int,
            default=None,
            help='Idade mínima em segundos (padrão: RECONCILE_AFTER_SECONDS)'
        )

    def handle(self, *args, **options):
        older_than = options['older_than']
        if older_than is None:
            older_than = feedman_settings.RECONCILE_AFTER_SECONDS

        if options['dry_run']:
            cutoff = timezone.now() - timedelta(seconds=older_than)
            stale = TransferJournal.objects.stale(cutoff).count()
            self.stdout.write(f'{stale} transferência(s) seria(m) resolvida(s)')
            return

        counts = ledger.reconcile_pending(older_than_seconds=older_than)
        self.stdout.write(
            self.style.SUCCESS(
                f"{counts['failed']} falha(s), {counts['compensated']} estorno(s), "
                f"{counts['pending']} pendente(s)"
            )
        )
