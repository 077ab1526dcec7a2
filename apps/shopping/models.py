from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class ShoppingList(models.Model):
    """Named list of items to buy at given stores."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='shopping_lists')
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=300, blank=True)
    is_favorite = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shopping_lists'
        indexes = [
            models.Index(fields=['owner', 'is_active']),
        ]
        ordering = ['-is_favorite', '-created_at']

    def __str__(self):
        return self.name

    @property
    def total_amount(self):
        """Sum of price x quantity over active, purchased entries."""
        total = Decimal('0.00')
        for entry in self.list_items.all():
            if entry.is_active and entry.is_purchased and entry.purchased_price is not None:
                total += entry.purchased_price * entry.quantity
        return total.quantize(Decimal('0.01'))


class ShoppingListItem(models.Model):
    """An item on a shopping list, to be bought at a specific store."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shopping_list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name='list_items')
    item = models.ForeignKey('items.Item', on_delete=models.CASCADE, related_name='list_entries')
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='list_entries')
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('1'))]
    )
    is_purchased = models.BooleanField(default=False)
    purchased_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    purchased_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shopping_list_items'
        indexes = [
            models.Index(fields=['shopping_list', 'is_active']),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity} x {self.item_id} @ {self.store_id}"
