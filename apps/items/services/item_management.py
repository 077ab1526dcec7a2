"""Item CRUD operations service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Dict, Any

from apps.prices.services import record_observation
from apps.stores.services import get_available_store
from ..models import Item
from .exceptions import ItemNotFoundError, DuplicateItemError

User = get_user_model()

logger = logging.getLogger(__name__)


def _check_duplicate(*, owner: User, name: str, brand: str, exclude_id: UUID = None) -> None:
    queryset = Item.objects.filter(
        owner=owner,
        name__iexact=name.strip(),
        brand__iexact=brand.strip(),
        is_active=True,
    )
    if exclude_id:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        label = f"{brand} {name}".strip()
        raise DuplicateItemError(f"Item '{label}' already exists")


def get_item(*, item_id: UUID, owner: User) -> Item:
    """
    Get an active item owned by the user.

    Raises:
        ItemNotFoundError: If item doesn't exist, is inactive or not owned
    """
    try:
        return Item.objects.prefetch_related('categories').get(
            id=item_id, owner=owner, is_active=True
        )
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")


@transaction.atomic
def create_item(
    *,
    owner: User,
    name: str,
    initial_price: Dict[str, Any],
    description: str = '',
    unit: str = 'piece',
    brand: str = '',
    is_favorite: bool = False
) -> Item:
    """
    Create an item together with its first price observation.

    Args:
        owner: User creating the item
        name: Item name
        initial_price: store_id, price, currency, observation_date and
            optional location/notes of the first observation
        description: Free text
        unit: liter, kilogram or piece
        brand: Brand name
        is_favorite: Favorite flag

    Returns:
        Created Item instance

    Raises:
        DuplicateItemError: If an active item with same name and brand exists
        StoreNotFoundError: If the store is not available to the user
    """
    _check_duplicate(owner=owner, name=name, brand=brand)

    price_data = dict(initial_price)
    store = get_available_store(store_id=price_data.pop('store_id'), user=owner)

    item = Item.objects.create(
        owner=owner,
        name=name.strip(),
        description=description,
        unit=unit,
        brand=brand.strip(),
        is_favorite=is_favorite,
    )
    record_observation(item=item, store=store, **price_data)

    logger.info("Created item %s for user %s", item.id, owner.id)
    return item


@transaction.atomic
def update_item(*, item_id: UUID, owner: User, data: Dict[str, Any]) -> Item:
    """
    Update descriptive fields of an item. Prices are recorded separately.

    Raises:
        ItemNotFoundError: If item doesn't exist or isn't owned
        DuplicateItemError: If the new name/brand collides with another item
    """
    try:
        item = (
            Item.objects
            .select_for_update()
            .get(id=item_id, owner=owner, is_active=True)
        )
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    if 'name' in data or 'brand' in data:
        _check_duplicate(
            owner=owner,
            name=data.get('name', item.name),
            brand=data.get('brand', item.brand),
            exclude_id=item.id,
        )

    allowed_fields = ['name', 'description', 'unit', 'brand', 'is_favorite']
    for field, value in data.items():
        if field in allowed_fields:
            setattr(item, field, value)

    item.save()
    return item


@transaction.atomic
def deactivate_item(*, item_id: UUID, owner: User) -> None:
    """
    Soft delete an item. Its price history stays untouched.

    Raises:
        ItemNotFoundError: If item doesn't exist, is inactive or not owned
    """
    updated = Item.objects.filter(id=item_id, owner=owner, is_active=True).update(is_active=False)
    if not updated:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    logger.info("Deactivated item %s", item_id)
