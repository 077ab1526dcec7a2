from decimal import Decimal
from django.utils import timezone
from rest_framework import serializers
from apps.prices.models import Currency
from .models import ShoppingList, ShoppingListItem


class ShoppingListItemSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='item.name', read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)

    class Meta:
        model = ShoppingListItem
        fields = [
            'id',
            'item',
            'item_name',
            'store',
            'store_name',
            'quantity',
            'is_purchased',
            'purchased_price',
            'purchased_date',
            'created_at',
        ]
        read_only_fields = fields


class ShoppingListSerializer(serializers.ModelSerializer):
    """Shopping list with its active entries and the amount spent so far."""

    items = ShoppingListItemSerializer(source='list_items', many=True, read_only=True)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = ShoppingList
        fields = [
            'id',
            'name',
            'description',
            'is_favorite',
            'items',
            'total_amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'items', 'total_amount', 'created_at', 'updated_at']


class ShoppingListCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=300, required=False, allow_blank=True, default='')
    is_favorite = serializers.BooleanField(required=False, default=False)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name cannot be blank')
        return value


class ShoppingListFilterSerializer(serializers.Serializer):
    is_favorite = serializers.BooleanField(required=False, allow_null=True, default=None)


class ListItemCreateSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    store_id = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=10,
        decimal_places=3,
        min_value=Decimal('1'),
        required=False,
        default=Decimal('1')
    )


class PurchaseSerializer(serializers.Serializer):
    """Purchase details; price and currency are optional."""

    purchased_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False,
        allow_null=True
    )
    purchased_date = serializers.DateField(required=False)
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)

    def validate_purchased_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError('Purchase date cannot be in the future')
        return value
