from django.db import models
import uuid


class ItemUnit(models.TextChoices):
    LITER = 'liter', 'Liter'
    KILOGRAM = 'kilogram', 'Kilogram'
    PIECE = 'piece', 'Piece'


class Item(models.Model):
    """Product a user tracks prices for."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, db_index=True)
    description = models.CharField(max_length=500, blank=True)
    unit = models.CharField(max_length=20, choices=ItemUnit.choices, default=ItemUnit.PIECE)
    brand = models.CharField(max_length=100, blank=True)
    is_favorite = models.BooleanField(default=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='items')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        indexes = [
            models.Index(fields=['owner', 'is_active']),
            models.Index(fields=['name']),
            models.Index(fields=['created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        if self.brand:
            return f"{self.brand} {self.name}"
        return self.name


class Category(models.Model):
    """User-defined group of items, e.g. 'Dairy' or 'Cleaning'."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='categories')
    items = models.ManyToManyField(Item, blank=True, related_name='categories')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'categories'
        indexes = [
            models.Index(fields=['owner', 'is_active']),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name
