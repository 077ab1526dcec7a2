"""Store CRUD operations service."""

import logging

from django.db import transaction
from django.db.models import ProtectedError
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Dict, Any

from ..models import Store
from .exceptions import (
    StoreNotFoundError,
    DuplicateStoreError,
    StorePermissionError,
    InvalidStoreStateError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def _check_duplicate_name(*, owner: User, name: str, exclude_id: UUID = None) -> None:
    queryset = Store.objects.filter(owner=owner, name__iexact=name.strip(), is_active=True)
    if exclude_id:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateStoreError(f"Store '{name}' already exists")


def _get_owned_store_for_update(*, store_id: UUID, user: User) -> Store:
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if store.owner_id != user.id:
        raise StorePermissionError("You can only modify your own stores")

    return store


@transaction.atomic
def create_store(
    *,
    owner: User,
    name: str,
    store_type: str = 'supermarket',
    address: str = '',
    city: str = '',
    region: str = '',
    country: str = '',
    website: str = '',
) -> Store:
    """
    Create a store owned by the user.

    Raises:
        DuplicateStoreError: If the user has an active store with the same name
    """
    _check_duplicate_name(owner=owner, name=name)

    store = Store.objects.create(
        owner=owner,
        name=name.strip(),
        store_type=store_type,
        address=address,
        city=city,
        region=region,
        country=country,
        website=website,
    )

    logger.info("Created store %s for user %s", store.id, owner.id)
    return store


@transaction.atomic
def update_store(*, store_id: UUID, user: User, data: Dict[str, Any]) -> Store:
    """
    Update an owned, active store.

    Raises:
        StoreNotFoundError: If store doesn't exist or is inactive
        StorePermissionError: If the user is not the owner
        DuplicateStoreError: If the new name collides with another store
    """
    store = _get_owned_store_for_update(store_id=store_id, user=user)
    if not store.is_active:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if 'name' in data and data['name'].strip().lower() != store.name.lower():
        _check_duplicate_name(owner=user, name=data['name'], exclude_id=store.id)

    allowed_fields = ['name', 'store_type', 'address', 'city', 'region', 'country', 'website']
    for field, value in data.items():
        if field in allowed_fields:
            setattr(store, field, value)

    store.save()
    return store


@transaction.atomic
def deactivate_store(*, store_id: UUID, user: User) -> None:
    """
    Soft delete an owned store. Its price observations are kept.

    Raises:
        StoreNotFoundError: If store doesn't exist
        StorePermissionError: If the user is not the owner
        InvalidStoreStateError: If the store is already inactive
    """
    store = _get_owned_store_for_update(store_id=store_id, user=user)
    if not store.is_active:
        raise InvalidStoreStateError("Store is already inactive")

    store.is_active = False
    store.save(update_fields=['is_active', 'updated_at'])
    logger.info("Deactivated store %s", store_id)


@transaction.atomic
def reactivate_store(*, store_id: UUID, user: User) -> Store:
    store = _get_owned_store_for_update(store_id=store_id, user=user)
    if store.is_active:
        raise InvalidStoreStateError("Store is already active")

    _check_duplicate_name(owner=user, name=store.name, exclude_id=store.id)

    store.is_active = True
    store.save(update_fields=['is_active', 'updated_at'])
    logger.info("Reactivated store %s", store_id)
    return store


@transaction.atomic
def delete_global_store(*, store_id: UUID) -> None:
    """
    Hard delete a global store. Admin only; the view checks the role.

    Raises:
        StoreNotFoundError: If no global store has this ID
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id, owner__isnull=True)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Global store with ID {store_id} not found")

    try:
        store.delete()
    except ProtectedError:
        raise InvalidStoreStateError(
            "Store has recorded prices or list entries and cannot be deleted"
        )
    logger.info("Deleted global store %s", store_id)
