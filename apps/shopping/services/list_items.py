"""Entries of a shopping list: adding, removing, purchasing."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from datetime import date
from decimal import Decimal
from uuid import UUID
from typing import Optional

from apps.accounts.services import get_preferences
from apps.items.services import get_item
from apps.prices.services import record_price
from apps.stores.services import get_available_store
from ..models import ShoppingListItem
from .exceptions import (
    ShoppingListItemNotFoundError,
    DuplicateListItemError,
    AlreadyPurchasedError,
)
from .shopping_list_management import _get_list

User = get_user_model()

logger = logging.getLogger(__name__)


def _get_entry(*, shopping_list, entry_id: UUID) -> ShoppingListItem:
    try:
        return (
            ShoppingListItem.objects
            .select_for_update()
            .get(id=entry_id, shopping_list=shopping_list, is_active=True)
        )
    except ShoppingListItem.DoesNotExist:
        raise ShoppingListItemNotFoundError(
            f"Item {entry_id} is not on shopping list '{shopping_list.name}'"
        )


@transaction.atomic
def add_list_item(
    *,
    list_id: UUID,
    owner: User,
    item_id: UUID,
    store_id: UUID,
    quantity: Decimal = Decimal('1')
) -> ShoppingListItem:
    """
    Put one of the user's items on a list, to be bought at a given store.

    Raises:
        ShoppingListNotFoundError: If list isn't an active list of the user
        ItemNotFoundError: If item isn't an active item of the user
        StoreNotFoundError: If store is not available to the user
        DuplicateListItemError: If the item is already on the list for that store
    """
    shopping_list = _get_list(list_id=list_id, owner=owner, for_update=True)
    item = get_item(item_id=item_id, owner=owner)
    store = get_available_store(store_id=store_id, user=owner)

    if shopping_list.list_items.filter(item=item, store=store, is_active=True).exists():
        raise DuplicateListItemError(
            f"'{item.name}' from {store.name} is already on shopping list '{shopping_list.name}'"
        )

    entry = ShoppingListItem.objects.create(
        shopping_list=shopping_list,
        item=item,
        store=store,
        quantity=quantity,
    )
    logger.info("Added item %s to shopping list %s", item.id, shopping_list.id)
    return entry


@transaction.atomic
def remove_list_item(*, list_id: UUID, owner: User, entry_id: UUID) -> None:
    """
    Raises:
        ShoppingListNotFoundError: If list isn't an active list of the user
        ShoppingListItemNotFoundError: If the entry doesn't belong to the list
    """
    shopping_list = _get_list(list_id=list_id, owner=owner, for_update=True)
    entry = _get_entry(shopping_list=shopping_list, entry_id=entry_id)

    entry.is_active = False
    entry.save(update_fields=['is_active', 'updated_at'])


@transaction.atomic
def mark_purchased(
    *,
    list_id: UUID,
    owner: User,
    entry_id: UUID,
    purchased_price: Optional[Decimal] = None,
    purchased_date: Optional[date] = None,
    currency: Optional[str] = None
) -> ShoppingListItem:
    """
    Mark an entry as bought.

    When a price is given it also becomes the item's current price at the
    entry's store, in the given currency or the user's preferred one.

    Raises:
        ShoppingListNotFoundError: If list isn't an active list of the user
        ShoppingListItemNotFoundError: If the entry doesn't belong to the list
        AlreadyPurchasedError: If the entry was already marked as bought
        PricesServiceError: If the price cannot be recorded
    """
    shopping_list = _get_list(list_id=list_id, owner=owner, for_update=True)
    entry = _get_entry(shopping_list=shopping_list, entry_id=entry_id)

    if entry.is_purchased:
        raise AlreadyPurchasedError(f"Item {entry_id} was already purchased")

    entry.is_purchased = True
    entry.purchased_price = purchased_price
    entry.purchased_date = purchased_date or timezone.localdate()
    entry.save()

    if purchased_price is not None:
        record_price(
            item_id=entry.item_id,
            owner=owner,
            store_id=entry.store_id,
            price=purchased_price,
            currency=currency or get_preferences(user=owner).currency,
            observation_date=entry.purchased_date,
        )

    logger.info("Marked entry %s of shopping list %s as purchased", entry.id, shopping_list.id)
    return entry
