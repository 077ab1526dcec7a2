from django.contrib import admin
from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['name', 'store_type', 'city', 'country', 'owner', 'is_active', 'created_at']
    list_filter = ['store_type', 'is_active', 'country']
    search_fields = ['name', 'city', 'address', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['owner']
