"""
Management command to audit warehouse balances against the movement ledger.

Usage:
    python manage.py verify_stock
    python manage.py verify_stock --warehouse 3
"""

from django.core.management.base import BaseCommand, CommandError

from feedman import ledger
from feedman.models import Warehouse


class Command(BaseCommand):
    """Verify stock command."""

    help = 'Confere o saldo dos depósitos com o histórico de movimentos'

    def add_arguments(self, parser):
        parser.add_argument(
            '--warehouse',
            type=int,
            default=None,
            help='ID de um único depósito'
        )

    def handle(self, *args, **options):
        warehouses = Warehouse.objects.order_by('pk')
        if options['warehouse'] is not None:
            warehouses = warehouses.filter(pk=options['warehouse'])
            if not warehouses.exists():
                raise CommandError(f"Depósito {options['warehouse']} não encontrado")

        inconsistent = 0
        for warehouse in warehouses:
            drift = ledger.verify(warehouse.pk)
            if drift is None or drift.consistent:
                continue
            inconsistent += 1
            self.stdout.write(
                self.style.ERROR(
                    f'{warehouse.code}: saldo {drift.recorded}, movimentos {drift.computed} '
                    f'(diferença {drift.difference})'
                )
            )

        if inconsistent:
            raise CommandError(f'{inconsistent} depósito(s) com divergência')
        self.stdout.write(self.style.SUCCESS('Saldos consistentes'))
