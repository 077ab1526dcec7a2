from django.contrib import admin
from .models import Item, Category


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'brand', 'unit', 'owner', 'is_favorite', 'is_active', 'created_at']
    list_filter = ['unit', 'is_favorite', 'is_active']
    search_fields = ['name', 'brand', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['owner']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'owner__email']
    filter_horizontal = ['items']
    raw_id_fields = ['owner']
