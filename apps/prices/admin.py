from django.contrib import admin
from .models import PriceObservation, PriceAlert, InflationReport


@admin.register(PriceObservation)
class PriceObservationAdmin(admin.ModelAdmin):
    """Observations are append-only, so the admin is read-only apart from notes."""

    list_display = ['item', 'store', 'price', 'currency', 'observation_date', 'is_active', 'created_at']
    list_filter = ['currency', 'is_active', 'observation_date']
    search_fields = ['item__name', 'store__name', 'location']
    readonly_fields = [
        'id', 'item', 'store', 'price', 'currency',
        'observation_date', 'location', 'is_active', 'created_at',
    ]
    date_hierarchy = 'observation_date'

    def has_add_permission(self, request):
        return False

    def save_model(self, request, obj, form, change):
        obj.save(update_fields=['notes'])


@admin.register(PriceAlert)
class PriceAlertAdmin(admin.ModelAdmin):
    list_display = ['item', 'user', 'alert_type', 'currency', 'target_price',
                    'threshold_percentage', 'last_triggered_at', 'is_active']
    list_filter = ['alert_type', 'currency', 'is_active']
    raw_id_fields = ['user', 'item']


@admin.register(InflationReport)
class InflationReportAdmin(admin.ModelAdmin):
    list_display = ['category', 'user', 'report_type', 'currency',
                    'start_date', 'end_date', 'inflation_rate', 'items_included']
    list_filter = ['report_type', 'currency', 'is_active']
    readonly_fields = ['created_at']
    raw_id_fields = ['user', 'category']
