"""Active-entity lookups shared by price services."""

from django.contrib.auth import get_user_model
from uuid import UUID

from apps.items.models import Item, Category
from apps.stores.models import Store
from apps.stores.services import store_search
from apps.stores.services.exceptions import StoreNotFoundError as StoreLookupError
from ..models import Currency
from .exceptions import (
    ItemNotFoundError,
    StoreNotFoundError,
    CategoryNotFoundError,
    UnsupportedCurrencyError,
)

User = get_user_model()


def get_active_item(*, item_id: UUID, owner: User = None, for_update: bool = False) -> Item:
    """
    Get an active item, optionally restricted to an owner.

    Raises:
        ItemNotFoundError: If item is absent, inactive or not owned
    """
    queryset = Item.objects.filter(is_active=True)
    if owner is not None:
        queryset = queryset.filter(owner=owner)
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")


def get_available_store(*, store_id: UUID, user: User) -> Store:
    """
    Resolve a store through the stores service.

    Raises:
        StoreNotFoundError: Also an instance of the stores app's StoreNotFoundError
    """
    try:
        return store_search.get_available_store(store_id=store_id, user=user)
    except StoreLookupError as e:
        raise StoreNotFoundError(str(e)) from e


def get_active_category(*, category_id: UUID, owner: User) -> Category:
    try:
        return Category.objects.get(id=category_id, owner=owner, is_active=True)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")


def validate_currency(currency: str) -> str:
    """Return the currency code or raise UnsupportedCurrencyError."""
    if not currency or currency not in Currency.values:
        supported = ', '.join(Currency.values)
        raise UnsupportedCurrencyError(
            f"Unsupported currency '{currency}'. Supported currencies: {supported}"
        )
    return currency
