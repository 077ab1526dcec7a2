"""Category CRUD and membership service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.db.models import QuerySet, Count, Q
from uuid import UUID
from typing import Dict, Any

from ..models import Category, Item
from .exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    DuplicateCategoryItemError,
    ItemNotInCategoryError,
    ItemNotFoundError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def _check_duplicate_name(*, owner: User, name: str, exclude_id: UUID = None) -> None:
    queryset = Category.objects.filter(owner=owner, name__iexact=name.strip(), is_active=True)
    if exclude_id:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateCategoryError(f"Category '{name}' already exists")


def _get_category(*, category_id: UUID, owner: User, for_update: bool = False) -> Category:
    queryset = Category.objects.filter(owner=owner, is_active=True)
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")


def get_category(*, category_id: UUID, owner: User) -> Category:
    """Get an active category with its items prefetched."""
    category = _get_category(category_id=category_id, owner=owner)
    return (
        Category.objects
        .prefetch_related('items')
        .get(id=category.id)
    )


def list_categories(*, owner: User) -> QuerySet[Category]:
    return (
        Category.objects
        .filter(owner=owner, is_active=True)
        .annotate(item_count=Count('items', filter=Q(items__is_active=True)))
    )


@transaction.atomic
def create_category(*, owner: User, name: str, description: str = '') -> Category:
    """
    Raises:
        DuplicateCategoryError: If an active category with this name exists
    """
    _check_duplicate_name(owner=owner, name=name)

    category = Category.objects.create(owner=owner, name=name.strip(), description=description)
    logger.info("Created category %s for user %s", category.id, owner.id)
    return category


@transaction.atomic
def update_category(*, category_id: UUID, owner: User, data: Dict[str, Any]) -> Category:
    category = _get_category(category_id=category_id, owner=owner, for_update=True)

    if 'name' in data:
        _check_duplicate_name(owner=owner, name=data['name'], exclude_id=category.id)

    for field in ('name', 'description'):
        if field in data:
            setattr(category, field, data[field])

    category.save()
    return category


@transaction.atomic
def archive_category(*, category_id: UUID, owner: User) -> None:
    """
    Archive a category. Its items stay active and keep their other categories.
    """
    category = _get_category(category_id=category_id, owner=owner, for_update=True)
    category.is_active = False
    category.save(update_fields=['is_active', 'updated_at'])
    logger.info("Archived category %s", category_id)


@transaction.atomic
def add_item_to_category(*, category_id: UUID, item_id: UUID, owner: User) -> Category:
    """
    Raises:
        CategoryNotFoundError: If category isn't an active category of the user
        ItemNotFoundError: If item isn't an active item of the user
        DuplicateCategoryItemError: If the item is already in the category
    """
    category = _get_category(category_id=category_id, owner=owner, for_update=True)

    try:
        item = Item.objects.get(id=item_id, owner=owner, is_active=True)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    if category.items.filter(id=item.id).exists():
        raise DuplicateCategoryItemError(f"Item '{item.name}' is already in category '{category.name}'")

    category.items.add(item)
    return category


@transaction.atomic
def remove_item_from_category(*, category_id: UUID, item_id: UUID, owner: User) -> Category:
    """
    Raises:
        CategoryNotFoundError: If category isn't an active category of the user
        ItemNotInCategoryError: If the item isn't in the category
    """
    category = _get_category(category_id=category_id, owner=owner, for_update=True)

    if not category.items.filter(id=item_id).exists():
        raise ItemNotInCategoryError(f"Item {item_id} is not in category '{category.name}'")

    category.items.remove(item_id)
    return category
