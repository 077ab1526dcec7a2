"""Recording price observations."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from apps.items.models import Item
from apps.stores.models import Store
from ..models import PriceObservation
from .alerts import evaluate_alerts
from .exceptions import (
    InvalidDateRangeError,
    InvalidPriceError,
    PriceObservationNotFoundError,
)
from .lookups import get_active_item, get_available_store, validate_currency

User = get_user_model()

logger = logging.getLogger(__name__)


def _latest_active(item: Item) -> Optional[PriceObservation]:
    return (
        PriceObservation.objects
        .filter(item=item, is_active=True)
        .order_by('-created_at', '-id')
        .first()
    )


def _validate_observation(price: Decimal, currency: str, observation_date: date) -> None:
    validate_currency(currency)
    if price is None or price <= 0:
        raise InvalidPriceError("Price must be greater than zero")
    if observation_date > timezone.localdate():
        raise InvalidDateRangeError(f"observation_date {observation_date} is in the future")


def _append(
    *,
    item: Item,
    store: Store,
    price: Decimal,
    currency: str,
    observation_date: date,
    location: str,
    notes: str,
    previous: Optional[PriceObservation]
) -> PriceObservation:
    observation = PriceObservation.objects.create(
        item=item,
        store=store,
        price=price,
        currency=currency,
        observation_date=observation_date,
        location=location,
        notes=notes,
    )
    logger.info(
        "Recorded price observation %s for item %s: %s %s",
        observation.id, item.id, price, currency
    )
    evaluate_alerts(observation=observation, previous=previous)
    return observation


@transaction.atomic
def record_observation(
    *,
    item: Item,
    store: Store,
    price: Decimal,
    currency: str,
    observation_date: date,
    location: str = '',
    notes: str = ''
) -> PriceObservation:
    """
    Append an observation without touching existing ones.

    Used for an item's first price. Callers have already resolved item and
    store.

    Raises:
        UnsupportedCurrencyError, InvalidPriceError, InvalidDateRangeError
    """
    _validate_observation(price, currency, observation_date)
    return _append(
        item=item,
        store=store,
        price=price,
        currency=currency,
        observation_date=observation_date,
        location=location,
        notes=notes,
        previous=_latest_active(item),
    )


@transaction.atomic
def record_price(
    *,
    item_id: UUID,
    owner: User,
    store_id: UUID,
    price: Decimal,
    currency: str,
    observation_date: date,
    location: str = '',
    notes: str = ''
) -> PriceObservation:
    """
    Record a new current price for an owned item.

    The previous latest active observation is marked inactive and the new
    one appended, so an item has at most one active price. Having no
    previous active price is fine.

    Raises:
        ItemNotFoundError: If item doesn't exist or isn't owned by owner
        StoreNotFoundError: If store is not available to owner
        UnsupportedCurrencyError, InvalidPriceError, InvalidDateRangeError
    """
    _validate_observation(price, currency, observation_date)
    item = get_active_item(item_id=item_id, owner=owner, for_update=True)
    store = get_available_store(store_id=store_id, user=owner)

    previous = _latest_active(item)
    if previous is not None:
        previous.is_active = False
        previous.save(update_fields=['is_active'])

    return _append(
        item=item,
        store=store,
        price=price,
        currency=currency,
        observation_date=observation_date,
        location=location,
        notes=notes,
        previous=previous,
    )


@transaction.atomic
def update_observation_notes(*, observation_id: UUID, owner: User, notes: str) -> PriceObservation:
    """Notes are the only editable content of an observation."""
    try:
        observation = PriceObservation.objects.get(id=observation_id, item__owner=owner)
    except PriceObservation.DoesNotExist:
        raise PriceObservationNotFoundError(f"Price observation {observation_id} not found")

    observation.notes = notes
    observation.save(update_fields=['notes'])
    return observation
