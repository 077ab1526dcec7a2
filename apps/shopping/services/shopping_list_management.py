"""Shopping list CRUD operations service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.db.models import QuerySet, Prefetch
from uuid import UUID
from typing import Dict, Any

from ..models import ShoppingList, ShoppingListItem
from .exceptions import ShoppingListNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def _active_entries() -> Prefetch:
    return Prefetch(
        'list_items',
        queryset=ShoppingListItem.objects.filter(is_active=True).select_related('item', 'store')
    )


def _get_list(*, list_id: UUID, owner: User, for_update: bool = False) -> ShoppingList:
    queryset = ShoppingList.objects.filter(owner=owner, is_active=True)
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=list_id)
    except ShoppingList.DoesNotExist:
        raise ShoppingListNotFoundError(f"Shopping list with ID {list_id} not found")


def get_shopping_list(*, list_id: UUID, owner: User) -> ShoppingList:
    """
    Get an active list of the user with its active entries prefetched.

    Raises:
        ShoppingListNotFoundError: If list doesn't exist, is inactive or not owned
    """
    _get_list(list_id=list_id, owner=owner)
    return (
        ShoppingList.objects
        .prefetch_related(_active_entries())
        .get(id=list_id)
    )


def list_shopping_lists(*, owner: User, is_favorite: bool = None) -> QuerySet[ShoppingList]:
    queryset = (
        ShoppingList.objects
        .filter(owner=owner, is_active=True)
        .prefetch_related(_active_entries())
    )
    if is_favorite is not None:
        queryset = queryset.filter(is_favorite=is_favorite)
    return queryset


@transaction.atomic
def create_shopping_list(
    *,
    owner: User,
    name: str,
    description: str = '',
    is_favorite: bool = False
) -> ShoppingList:
    shopping_list = ShoppingList.objects.create(
        owner=owner,
        name=name.strip(),
        description=description,
        is_favorite=is_favorite,
    )
    logger.info("Created shopping list %s for user %s", shopping_list.id, owner.id)
    return shopping_list


@transaction.atomic
def update_shopping_list(*, list_id: UUID, owner: User, data: Dict[str, Any]) -> ShoppingList:
    shopping_list = _get_list(list_id=list_id, owner=owner, for_update=True)

    allowed_fields = ['name', 'description', 'is_favorite']
    for field, value in data.items():
        if field in allowed_fields:
            setattr(shopping_list, field, value)

    shopping_list.save()
    return shopping_list


@transaction.atomic
def deactivate_shopping_list(*, list_id: UUID, owner: User) -> None:
    """
    Soft delete a list together with all of its entries.

    Raises:
        ShoppingListNotFoundError: If list doesn't exist, is inactive or not owned
    """
    shopping_list = _get_list(list_id=list_id, owner=owner, for_update=True)

    entries = shopping_list.list_items.filter(is_active=True).update(is_active=False)
    shopping_list.is_active = False
    shopping_list.save(update_fields=['is_active', 'updated_at'])

    logger.info("Deactivated shopping list %s and %s entries", list_id, entries)
