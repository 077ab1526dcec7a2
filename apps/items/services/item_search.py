"""Item search and filtering service."""

from datetime import datetime
from django.contrib.auth import get_user_model
from django.db.models import QuerySet
from typing import Optional
from uuid import UUID

from ..models import Item

User = get_user_model()


def search_items(
    *,
    owner: User,
    search: Optional[str] = None,
    brand: Optional[str] = None,
    unit: Optional[str] = None,
    is_favorite: Optional[bool] = None,
    category_id: Optional[UUID] = None,
    created_after: Optional[datetime] = None,
    created_before: Optional[datetime] = None,
    is_active: Optional[bool] = True
) -> QuerySet[Item]:
    """
    Search and filter the user's items.

    Args:
        owner: Owner of the items
        search: Keyword matched against the name
        brand: Brand, case-insensitive exact match
        unit: Unit of measure
        is_favorite: Favorite flag
        category_id: Only items in this category
        created_after: Created at or after this moment
        created_before: Created at or before this moment
        is_active: Active flag, None for both

    Returns:
        Filtered QuerySet of Item
    """
    queryset = Item.objects.filter(owner=owner).prefetch_related('categories')

    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)

    if search:
        queryset = queryset.filter(name__icontains=search)

    if brand:
        queryset = queryset.filter(brand__iexact=brand)

    if unit:
        queryset = queryset.filter(unit=unit)

    if is_favorite is not None:
        queryset = queryset.filter(is_favorite=is_favorite)

    if category_id:
        queryset = queryset.filter(categories__id=category_id)

    if created_after:
        queryset = queryset.filter(created_at__gte=created_after)

    if created_before:
        queryset = queryset.filter(created_at__lte=created_before)

    return queryset.distinct()
