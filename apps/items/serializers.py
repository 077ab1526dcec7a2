from rest_framework import serializers
from apps.prices.serializers import PriceObservationCreateSerializer, PriceObservationSerializer
from apps.prices.models import PriceObservation
from .models import Item, Category, ItemUnit


class CategorySummarySerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = ['id', 'name']


class ItemListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Item
        fields = ['id', 'name', 'brand', 'unit', 'is_favorite', 'is_active', 'created_at']


class ItemSerializer(serializers.ModelSerializer):
    """Full item details including its current price."""

    categories = serializers.SerializerMethodField()
    latest_price = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = [
            'id',
            'name',
            'description',
            'unit',
            'brand',
            'is_favorite',
            'is_active',
            'categories',
            'latest_price',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']

    def get_categories(self, obj):
        active = [category for category in obj.categories.all() if category.is_active]
        return CategorySummarySerializer(active, many=True).data

    def get_latest_price(self, obj):
        observation = (
            PriceObservation.objects
            .filter(item=obj, is_active=True)
            .select_related('store', 'item')
            .order_by('-created_at')
            .first()
        )
        if observation is None:
            return None
        return PriceObservationSerializer(observation).data


class ItemCreateSerializer(serializers.ModelSerializer):
    """Item fields plus the first price observation."""

    initial_price = PriceObservationCreateSerializer()

    class Meta:
        model = Item
        fields = ['name', 'description', 'unit', 'brand', 'is_favorite', 'initial_price']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name cannot be blank')
        return value.strip()


class ItemUpdateSerializer(serializers.ModelSerializer):

    class Meta:
        model = Item
        fields = ['name', 'description', 'unit', 'brand', 'is_favorite']


class ItemFilterSerializer(serializers.Serializer):
    """Validates query parameters for the item list."""

    search = serializers.CharField(max_length=100, required=False)
    brand = serializers.CharField(max_length=100, required=False)
    unit = serializers.ChoiceField(choices=ItemUnit.choices, required=False)
    is_favorite = serializers.BooleanField(required=False, allow_null=True, default=None)
    category = serializers.UUIDField(required=False)
    created_after = serializers.DateTimeField(required=False)
    created_before = serializers.DateTimeField(required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=True)


class CategorySerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'item_count', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class CategoryDetailSerializer(serializers.ModelSerializer):
    items = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'items', 'created_at', 'updated_at']

    def get_items(self, obj):
        active = [item for item in obj.items.all() if item.is_active]
        return ItemListSerializer(active, many=True).data


class CategoryCreateSerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = ['name', 'description']


class CategoryItemSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
