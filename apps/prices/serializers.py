"""
Serializers for prices app.

Input serializers validate query parameters and request bodies before
they reach the services. Output serializers shape observations, alerts,
reports and engine results.
"""

from decimal import Decimal
from django.utils import timezone
from rest_framework import serializers

from apps.stores.models import StoreType
from .models import PriceObservation, PriceAlert, InflationReport, Currency, AlertType, ReportType
from .services import ORDERING_FIELDS


def _ordering_choices():
    return list(ORDERING_FIELDS) + [f"-{f}" for f in ORDERING_FIELDS]


# =============================================================================
# Input Serializers
# =============================================================================

class PriceObservationCreateSerializer(serializers.Serializer):
    """Body for recording a new price."""

    store_id = serializers.UUIDField()
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    currency = serializers.ChoiceField(choices=Currency.choices)
    observation_date = serializers.DateField()
    location = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    notes = serializers.CharField(max_length=400, required=False, allow_blank=True, default='')

    def validate_observation_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError('Observation date cannot be in the future')
        return value


class ObservationNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(max_length=400, allow_blank=True)


class ObservationSearchQuerySerializer(serializers.Serializer):
    """
    Query parameters for observation search.

    Every filter is optional; pagination defaults come from settings.
    """

    item = serializers.UUIDField(required=False)
    store = serializers.UUIDField(required=False)
    store_type = serializers.ChoiceField(choices=StoreType.choices, required=False)
    store_name = serializers.CharField(max_length=100, required=False)
    city = serializers.CharField(max_length=100, required=False)
    currency = serializers.ChoiceField(choices=Currency.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    page_size = serializers.IntegerField(min_value=1, required=False)
    ordering = serializers.ChoiceField(choices=_ordering_choices(), required=False, default='-created_at')

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_from': 'date_from must not be after date_to'
            })
        return attrs


class InflationQuerySerializer(serializers.Serializer):
    currency = serializers.ChoiceField(choices=Currency.choices)
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class PriceAlertCreateSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    alert_type = serializers.ChoiceField(choices=AlertType.choices)
    currency = serializers.ChoiceField(choices=Currency.choices, default=Currency.EUR)
    target_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True
    )
    threshold_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2,
        min_value=Decimal('0.01'), max_value=Decimal('100.00'),
        required=False, allow_null=True
    )


class InflationReportCreateSerializer(serializers.Serializer):
    category_id = serializers.UUIDField()
    report_type = serializers.ChoiceField(choices=ReportType.choices)
    currency = serializers.ChoiceField(choices=Currency.choices)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        if attrs['report_type'] == ReportType.CUSTOM:
            if not attrs.get('start_date') or not attrs.get('end_date'):
                raise serializers.ValidationError(
                    'Custom reports require start_date and end_date'
                )
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class PriceObservationSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='item.name', read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)

    class Meta:
        model = PriceObservation
        fields = [
            'id',
            'item',
            'item_name',
            'store',
            'store_name',
            'price',
            'currency',
            'observation_date',
            'location',
            'notes',
            'is_active',
            'created_at',
        ]
        read_only_fields = fields


class ObservationPageSerializer(serializers.Serializer):
    count = serializers.IntegerField(source='total_count')
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    num_pages = serializers.IntegerField()
    results = PriceObservationSerializer(many=True)


class InflationResultSerializer(serializers.Serializer):
    currency = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    started_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    last_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    price_difference = serializers.DecimalField(max_digits=None, decimal_places=2, allow_null=True)
    inflation_rate = serializers.DecimalField(max_digits=None, decimal_places=2, allow_null=True)
    observations_count = serializers.IntegerField()
    has_sufficient_data = serializers.BooleanField()
    insufficient_data_message = serializers.CharField(allow_null=True)


class PriceAlertSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source='item.name', read_only=True)

    class Meta:
        model = PriceAlert
        fields = [
            'id',
            'item',
            'item_name',
            'alert_type',
            'currency',
            'target_price',
            'threshold_percentage',
            'last_triggered_at',
            'is_active',
            'created_at',
        ]
        read_only_fields = fields


class InflationReportSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = InflationReport
        fields = [
            'id',
            'category',
            'category_name',
            'report_type',
            'currency',
            'start_date',
            'end_date',
            'inflation_rate',
            'items_included',
            'created_at',
        ]
        read_only_fields = fields


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
