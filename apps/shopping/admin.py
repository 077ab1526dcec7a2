from django.contrib import admin
from .models import ShoppingList, ShoppingListItem


class ShoppingListItemInline(admin.TabularInline):
    model = ShoppingListItem
    extra = 0
    fields = ['item', 'store', 'quantity', 'is_purchased', 'purchased_price', 'purchased_date', 'is_active']
    raw_id_fields = ['item', 'store']


@admin.register(ShoppingList)
class ShoppingListAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'is_favorite', 'is_active', 'created_at']
    list_filter = ['is_favorite', 'is_active']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['owner']
    inlines = [ShoppingListItemInline]
