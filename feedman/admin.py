"""
Feedman Admin.

Provides views for day-to-day operation and production debugging:
- Warehouse: list + edit (quantity read-only, changes go through the ledger)
- StockMovement: read-only audit trail
- TransferJournal: read-only with "reconcile" action
- Pond / FishBatch: list + edit (population read-only)
- BiometrySample / MortalityRecord / FeedingEvent: read-only records
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from feedman.models import (
    BiometrySample,
    FeedingEvent,
    FishBatch,
    MortalityRecord,
    Pond,
    StockMovement,
    TransferJournal,
    Warehouse,
)

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Append-only rows: no add, change or delete from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# WAREHOUSE ADMIN
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    """Warehouse admin — editable, except the balance."""

    list_display = ['code', 'name', 'kind', 'parent', 'quantity_display', 'unit', 'farm_ref']
    list_filter = ['kind', 'farm_ref']
    search_fields = ['code', 'name']
    readonly_fields = ['_quantity', 'created_at', 'updated_at']

    @admin.display(description=_('Quantidade'))
    def quantity_display(self, obj):
        return obj.quantity


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdmin):
    """StockMovement admin — read-only. Immutable audit trail."""

    list_display = ['pk', 'timestamp', 'kind', 'source', 'destination', 'amount', 'actor']
    list_filter = ['kind', 'timestamp']
    search_fields = ['note', 'actor']
    readonly_fields = ['kind', 'source', 'destination', 'amount', 'actor',
                       'note', 'metadata', 'timestamp']
    date_hierarchy = 'timestamp'


# =========================================================================
# TRANSFER JOURNAL ADMIN (read-only with reconcile action)
# =========================================================================

@admin.register(TransferJournal)
class TransferJournalAdmin(ReadOnlyAdmin):
    """TransferJournal admin — read-only with reconcile action."""

    list_display = ['pk', 'created_at', 'source', 'destination', 'amount',
                    'status', 'attempts', 'actor']
    list_filter = ['status']
    search_fields = ['actor', 'note', 'detail']
    readonly_fields = ['source', 'destination', 'amount', 'actor', 'note', 'status',
                       'attempts', 'movement', 'detail', 'created_at', 'updated_at']
    actions = ['reconcile_pending']

    @admin.action(description=_('Resolver transferências pendentes'))
    def reconcile_pending(self, request, queryset):
        from feedman import ledger

        summary = ledger.reconcile_pending(older_than_seconds=0)
        logger.info("admin.reconcile", extra=summary)
        self.message_user(
            request,
            _('{failed} falha(s), {compensated} estorno(s), {pending} pendente(s).').format(**summary),
        )


# =========================================================================
# POND / BATCH ADMIN
# =========================================================================

@admin.register(Pond)
class PondAdmin(admin.ModelAdmin):
    """Pond admin — population changes through stocking and mortality only."""

    list_display = ['name', 'warehouse', 'population', 'area_m2', 'farm_ref']
    list_filter = ['farm_ref']
    search_fields = ['name']
    readonly_fields = ['population', 'created_at', 'updated_at']


@admin.register(FishBatch)
class FishBatchAdmin(admin.ModelAdmin):
    """FishBatch admin — lot overview."""

    list_display = ['pk', 'pond', 'species', 'current_population', 'average_weight_g',
                    'biomass_display', 'status', 'started_at']
    list_filter = ['status', 'species']
    search_fields = ['species', 'pond__name']
    readonly_fields = ['current_population', 'average_weight_g', 'started_at']

    @admin.display(description=_('Biomassa (kg)'))
    def biomass_display(self, obj):
        return obj.biomass_kg


# =========================================================================
# RECORDS (read-only)
# =========================================================================

@admin.register(BiometrySample)
class BiometrySampleAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'pond', 'average_weight_g', 'sample_size', 'biomass_kg']
    list_filter = ['pond']
    date_hierarchy = 'timestamp'


@admin.register(MortalityRecord)
class MortalityRecordAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'pond', 'count', 'cause', 'population_before', 'actor']
    list_filter = ['pond']
    search_fields = ['cause']
    date_hierarchy = 'timestamp'


@admin.register(FeedingEvent)
class FeedingEventAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'pond', 'warehouse', 'amount_kg', 'recommended_kg', 'actor']
    list_filter = ['pond', 'warehouse']
    search_fields = ['actor', 'notes']
    date_hierarchy = 'timestamp'
