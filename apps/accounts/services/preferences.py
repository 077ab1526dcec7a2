"""User preferences service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from typing import Dict, Any
from uuid import UUID

from apps.stores.services import get_available_store, StoreNotFoundError
from ..models import UserPreferences
from .exceptions import PreferredStoreError

User = get_user_model()

logger = logging.getLogger(__name__)


def get_preferences(*, user: User) -> UserPreferences:
    """Return the user's preferences, creating defaults on first access."""
    return UserPreferences.ensure_for(user)


@transaction.atomic
def update_preferences(*, user: User, data: Dict[str, Any]) -> UserPreferences:
    """
    Update currency, location and notification settings.

    Unknown keys are ignored. Preferred stores are managed with
    toggle_preferred_store().
    """
    preferences = UserPreferences.ensure_for(user)

    allowed_fields = ['currency', 'location', 'notification_enabled', 'email_alerts']
    for field, value in data.items():
        if field in allowed_fields:
            setattr(preferences, field, value)

    preferences.save()
    return preferences


@transaction.atomic
def reset_preferences(*, user: User) -> UserPreferences:
    preferences = UserPreferences.ensure_for(user)
    preferences.reset_to_defaults()
    logger.info("Reset preferences for user %s", user.id)
    return preferences


@transaction.atomic
def toggle_preferred_store(*, user: User, store_id: UUID) -> bool:
    """
    Add the store to the user's preferred stores, or remove it if present.

    Returns:
        True if the store is now preferred, False if it was removed

    Raises:
        PreferredStoreError: If the store is not available to the user
    """
    preferences = UserPreferences.ensure_for(user)

    if preferences.preferred_stores.filter(id=store_id).exists():
        preferences.preferred_stores.remove(store_id)
        return False

    try:
        store = get_available_store(store_id=store_id, user=user)
    except StoreNotFoundError as e:
        raise PreferredStoreError(str(e))

    preferences.preferred_stores.add(store)
    return True
