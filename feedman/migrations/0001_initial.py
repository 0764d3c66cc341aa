"""
Initial migration for Feedman models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Feedman models: Warehouse, StockMovement, TransferJournal, Pond, FishBatch and records."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(help_text='Identificador único (ex: central, satelite-norte)', unique=True, verbose_name='Código')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('unit', models.CharField(default='kg', max_length=10, verbose_name='Unidade')),
                ('kind', models.CharField(choices=[('global', 'Central'), ('satellite', 'Satélite')], default='global', max_length=20, verbose_name='Tipo')),
                ('farm_ref', models.CharField(blank=True, db_index=True, default='', max_length=64, verbose_name='Fazenda')),
                ('_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Quantidade')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, help_text='Somente satélites: depósito central que os abastece.', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='satellites', to='feedman.warehouse', verbose_name='Depósito central')),
            ],
            options={
                'verbose_name': 'Depósito',
                'verbose_name_plural': 'Depósitos',
                'ordering': ['kind', 'name'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('_quantity__gte', 0)), name='warehouse_quantity_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('transfer', 'Transferência'), ('consumption', 'Consumo'), ('adjustment', 'Ajuste')], max_length=20, verbose_name='Tipo')),
                ('amount', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantidade')),
                ('actor', models.CharField(max_length=128, verbose_name='Operador')),
                ('note', models.CharField(blank=True, default='', max_length=255, verbose_name='Observação')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('destination', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='incoming_movements', to='feedman.warehouse', verbose_name='Destino')),
                ('source', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='outgoing_movements', to='feedman.warehouse', verbose_name='Origem')),
            ],
            options={
                'verbose_name': 'Movimento',
                'verbose_name_plural': 'Movimentos',
                'ordering': ['-pk'],
                'indexes': [
                    models.Index(fields=['source', 'id'], name='movement_source_seq_idx'),
                    models.Index(fields=['destination', 'id'], name='movement_dest_seq_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='movement_amount_positive'),
                    models.CheckConstraint(condition=models.Q(('source__isnull', False), ('destination__isnull', False), _connector='OR'), name='movement_has_warehouse'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TransferJournal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantidade')),
                ('actor', models.CharField(max_length=128, verbose_name='Operador')),
                ('note', models.CharField(blank=True, default='', max_length=255, verbose_name='Observação')),
                ('status', models.CharField(choices=[('started', 'Iniciada'), ('source_updated', 'Origem debitada'), ('completed', 'Concluída'), ('compensated', 'Estornada'), ('failed', 'Falhou')], db_index=True, default='started', max_length=20, verbose_name='Status')),
                ('attempts', models.PositiveIntegerField(default=0, verbose_name='Tentativas')),
                ('detail', models.CharField(blank=True, default='', max_length=255, verbose_name='Detalhe')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('destination', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='feedman.warehouse', verbose_name='Destino')),
                ('movement', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='journal', to='feedman.stockmovement', verbose_name='Movimento')),
                ('source', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='feedman.warehouse', verbose_name='Origem')),
            ],
            options={
                'verbose_name': 'Transferência',
                'verbose_name_plural': 'Transferências',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'updated_at'], name='transfer_status_updated_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Pond',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('population', models.PositiveIntegerField(default=0, verbose_name='População')),
                ('area_m2', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Área (m²)')),
                ('farm_ref', models.CharField(blank=True, db_index=True, default='', max_length=64, verbose_name='Fazenda')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ponds', to='feedman.warehouse', verbose_name='Depósito de ração')),
            ],
            options={
                'verbose_name': 'Viveiro',
                'verbose_name_plural': 'Viveiros',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='FishBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('species', models.CharField(max_length=100, verbose_name='Espécie')),
                ('initial_population', models.PositiveIntegerField(verbose_name='População inicial')),
                ('current_population', models.PositiveIntegerField(verbose_name='População atual')),
                ('average_weight_g', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=10, verbose_name='Peso médio (g)')),
                ('status', models.CharField(choices=[('active', 'Ativo'), ('closed', 'Encerrado')], db_index=True, default='active', max_length=20, verbose_name='Status')),
                ('started_at', models.DateTimeField(auto_now_add=True, verbose_name='Povoado em')),
                ('closed_at', models.DateTimeField(blank=True, null=True, verbose_name='Encerrado em')),
                ('pond', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='feedman.pond', verbose_name='Viveiro')),
            ],
            options={
                'verbose_name': 'Lote de peixes',
                'verbose_name_plural': 'Lotes de peixes',
                'ordering': ['-started_at'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'active')), fields=('pond',), name='one_active_batch_per_pond'),
                    models.CheckConstraint(condition=models.Q(('average_weight_g__gte', 0)), name='batch_weight_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BiometrySample',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('average_weight_g', models.DecimalField(decimal_places=3, max_digits=10, verbose_name='Peso médio (g)')),
                ('average_length_cm', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, verbose_name='Comprimento médio (cm)')),
                ('sample_size', models.PositiveIntegerField(verbose_name='Peixes amostrados')),
                ('biomass_kg', models.DecimalField(decimal_places=3, help_text='População × peso médio no momento da amostragem', max_digits=14, verbose_name='Biomassa estimada (kg)')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='biometry_samples', to='feedman.fishbatch', verbose_name='Lote')),
                ('pond', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='biometry_samples', to='feedman.pond', verbose_name='Viveiro')),
            ],
            options={
                'verbose_name': 'Biometria',
                'verbose_name_plural': 'Biometrias',
                'ordering': ['-timestamp', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='MortalityRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('count', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('cause', models.CharField(default='Não especificada', max_length=255, verbose_name='Causa')),
                ('population_before', models.PositiveIntegerField(verbose_name='População anterior')),
                ('actor', models.CharField(blank=True, default='', max_length=128, verbose_name='Operador')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='mortality_records', to='feedman.fishbatch', verbose_name='Lote')),
                ('pond', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='mortality_records', to='feedman.pond', verbose_name='Viveiro')),
            ],
            options={
                'verbose_name': 'Mortalidade',
                'verbose_name_plural': 'Mortalidades',
                'ordering': ['-timestamp', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='FeedingEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount_kg', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantidade (kg)')),
                ('recommended_kg', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='Recomendado (kg)')),
                ('actor', models.CharField(max_length=128, verbose_name='Operador')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('movement', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='feeding_event', to='feedman.stockmovement', verbose_name='Movimento')),
                ('pond', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='feeding_events', to='feedman.pond', verbose_name='Viveiro')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='feeding_events', to='feedman.warehouse', verbose_name='Depósito')),
            ],
            options={
                'verbose_name': 'Arraçoamento',
                'verbose_name_plural': 'Arraçoamentos',
                'ordering': ['-timestamp', '-pk'],
            },
        ),
    ]
