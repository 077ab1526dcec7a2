from django.db import models
from django.db.models import Q
import uuid


class StoreType(models.TextChoices):
    SUPERMARKET = 'supermarket', 'Supermarket'
    MINI_MARKET = 'mini_market', 'Mini Market'
    BAKERY = 'bakery', 'Bakery'
    BUTCHER = 'butcher', 'Butcher'
    GREENGROCER = 'greengrocer', 'Greengrocer'
    PHARMACY = 'pharmacy', 'Pharmacy'
    ONLINE = 'online', 'Online'
    OTHER = 'other', 'Other'


class StoreQuerySet(models.QuerySet):

    def available_to(self, user):
        """Active stores that are global or owned by the user."""
        return self.filter(
            Q(owner__isnull=True) | Q(owner=user),
            is_active=True,
        )


class Store(models.Model):
    """Shop where prices are observed. Stores without owner are global."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, db_index=True)
    store_type = models.CharField(max_length=20, choices=StoreType.choices, default=StoreType.SUPERMARKET)
    address = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True, db_index=True)
    region = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    website = models.URLField(max_length=300, blank=True)
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='stores'
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StoreQuerySet.as_manager()

    class Meta:
        db_table = 'stores'
        indexes = [
            models.Index(fields=['owner', 'is_active']),
            models.Index(fields=['store_type']),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.get_store_type_display()})"

    @property
    def is_global(self):
        return self.owner_id is None

    @property
    def location(self):
        """Human readable 'address, city, country' string."""
        return ', '.join(part for part in [self.address, self.city, self.country] if part)
