from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class Currency(models.TextChoices):
    EUR = 'EUR', 'Euro'
    USD = 'USD', 'US Dollar'


class PriceObservation(models.Model):
    """
    Price of an item at a store on a given date.

    Observations are append-only: once stored, only ``is_active`` and
    ``notes`` may change. A new price is a new row.
    """

    MUTABLE_FIELDS = frozenset({'is_active', 'notes'})

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    item = models.ForeignKey('items.Item', on_delete=models.CASCADE, related_name='price_observations')
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='price_observations')
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    currency = models.CharField(max_length=3, choices=Currency.choices)
    observation_date = models.DateField()
    location = models.CharField(max_length=100, blank=True)
    notes = models.CharField(max_length=400, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'price_observations'
        indexes = [
            models.Index(fields=['item', 'currency', 'observation_date']),
            models.Index(fields=['item', 'is_active', 'created_at']),
            models.Index(fields=['store']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.item_id} @ {self.store_id}: {self.price} {self.currency} ({self.observation_date})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            update_fields = kwargs.get('update_fields')
            if update_fields is None or not set(update_fields) <= self.MUTABLE_FIELDS:
                raise ValueError(
                    "Price observations are append-only; only is_active and notes can be updated"
                )
        super().save(*args, **kwargs)


class AlertType(models.TextChoices):
    TARGET_PRICE = 'target_price', 'Target Price'
    PRICE_DROP = 'price_drop', 'Price Drop'
    PRICE_INCREASE = 'price_increase', 'Price Increase'


class PriceAlert(models.Model):
    """Notification rule evaluated whenever a new price is recorded."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='price_alerts')
    item = models.ForeignKey('items.Item', on_delete=models.CASCADE, related_name='price_alerts')
    alert_type = models.CharField(max_length=20, choices=AlertType.choices)
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.EUR)
    target_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    threshold_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('100.00'))]
    )
    last_triggered_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'price_alerts'
        indexes = [
            models.Index(fields=['item', 'is_active', 'currency']),
            models.Index(fields=['user', 'is_active']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_alert_type_display()} alert on {self.item_id}"


class ReportType(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    QUARTERLY = 'quarterly', 'Quarterly'
    YEARLY = 'yearly', 'Yearly'
    CUSTOM = 'custom', 'Custom'


class InflationReport(models.Model):
    """Average inflation across the items of a category for a period."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='inflation_reports')
    category = models.ForeignKey('items.Category', on_delete=models.CASCADE, related_name='inflation_reports')
    report_type = models.CharField(max_length=20, choices=ReportType.choices)
    currency = models.CharField(max_length=3, choices=Currency.choices)
    start_date = models.DateField()
    end_date = models.DateField()
    inflation_rate = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)
    items_included = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'inflation_reports'
        indexes = [
            models.Index(fields=['user', 'is_active']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_report_type_display()} report {self.start_date} - {self.end_date}"
