"""Store lookup and filtering service."""

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet
from typing import Optional
from uuid import UUID

from ..models import Store
from .exceptions import StoreNotFoundError

User = get_user_model()


def get_available_store(*, store_id: UUID, user: User) -> Store:
    """
    Get an active store that is global or owned by the user.

    Raises:
        StoreNotFoundError: If the store doesn't exist or isn't available
    """
    try:
        return Store.objects.available_to(user).get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")


def search_stores(
    *,
    user: User,
    store_type: Optional[str] = None,
    city: Optional[str] = None,
    country: Optional[str] = None,
    name_contains: Optional[str] = None,
    location_contains: Optional[str] = None,
    has_website: Optional[bool] = None,
    is_active: Optional[bool] = True,
) -> QuerySet[Store]:
    """
    Filter stores visible to the user (global or owned).

    Args:
        user: Requesting user
        store_type: Exact store type
        city: City, case-insensitive exact match
        country: Country, case-insensitive exact match
        name_contains: Substring of the store name
        location_contains: Substring of city, region, country or address
        has_website: True for stores with a website, False for stores without
        is_active: Active flag; None returns both. Inactive stores are
            only listed for their owner.

    Returns:
        Filtered QuerySet of Store
    """
    queryset = Store.objects.filter(Q(owner__isnull=True) | Q(owner=user))

    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    if is_active is not True:
        queryset = queryset.exclude(is_active=False, owner__isnull=True)

    if store_type:
        queryset = queryset.filter(store_type=store_type)

    if city:
        queryset = queryset.filter(city__iexact=city)

    if country:
        queryset = queryset.filter(country__iexact=country)

    if name_contains:
        queryset = queryset.filter(name__icontains=name_contains)

    if location_contains:
        queryset = queryset.filter(
            Q(city__icontains=location_contains) |
            Q(region__icontains=location_contains) |
            Q(country__icontains=location_contains) |
            Q(address__icontains=location_contains)
        )

    if has_website is True:
        queryset = queryset.exclude(website='')
    elif has_website is False:
        queryset = queryset.filter(website='')

    return queryset
