from rest_framework import serializers
from .models import Store, StoreType


class StoreSerializer(serializers.ModelSerializer):
    """Full store details."""

    is_global = serializers.BooleanField(read_only=True)
    store_type_display = serializers.CharField(source='get_store_type_display', read_only=True)

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'store_type',
            'store_type_display',
            'address',
            'city',
            'region',
            'country',
            'website',
            'is_global',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']


class StoreListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    is_global = serializers.BooleanField(read_only=True)

    class Meta:
        model = Store
        fields = ['id', 'name', 'store_type', 'city', 'country', 'is_global', 'is_active']


class StoreCreateSerializer(serializers.ModelSerializer):

    class Meta:
        model = Store
        fields = ['name', 'store_type', 'address', 'city', 'region', 'country', 'website']

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Name cannot be blank')
        return value.strip()


class StoreFilterSerializer(serializers.Serializer):
    """Validates query parameters for the store list."""

    store_type = serializers.ChoiceField(choices=StoreType.choices, required=False)
    city = serializers.CharField(max_length=100, required=False)
    country = serializers.CharField(max_length=100, required=False)
    name_contains = serializers.CharField(max_length=100, required=False)
    location_contains = serializers.CharField(max_length=100, required=False)
    has_website = serializers.BooleanField(required=False, allow_null=True, default=None)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=True)
