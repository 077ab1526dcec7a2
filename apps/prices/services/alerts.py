"""Price alert management and evaluation."""

import logging
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ..models import PriceAlert, PriceObservation, AlertType
from .exceptions import AlertNotFoundError, InvalidAlertError
from .lookups import get_active_item, validate_currency

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def create_alert(
    *,
    user: User,
    item_id: UUID,
    alert_type: str,
    currency: str,
    target_price: Optional[Decimal] = None,
    threshold_percentage: Optional[Decimal] = None
) -> PriceAlert:
    """
    Create a price alert on an owned item.

    Raises:
        ItemNotFoundError: If item doesn't exist or isn't owned by the user
        UnsupportedCurrencyError: If currency is not supported
        InvalidAlertError: If target_price is missing for a target alert,
            or given for a drop/increase alert
    """
    validate_currency(currency)
    item = get_active_item(item_id=item_id, owner=user)

    if alert_type == AlertType.TARGET_PRICE:
        if target_price is None:
            raise InvalidAlertError("target_price is required for target price alerts")
    elif alert_type in (AlertType.PRICE_DROP, AlertType.PRICE_INCREASE):
        if target_price is not None:
            raise InvalidAlertError("target_price only applies to target price alerts")
    else:
        raise InvalidAlertError(f"Unknown alert type '{alert_type}'")

    alert = PriceAlert.objects.create(
        user=user,
        item=item,
        alert_type=alert_type,
        currency=currency,
        target_price=target_price,
        threshold_percentage=threshold_percentage,
    )

    logger.info("Created %s alert %s on item %s", alert_type, alert.id, item.id)
    return alert


def list_alerts(*, user: User, item_id: Optional[UUID] = None, is_active: Optional[bool] = True) -> QuerySet[PriceAlert]:
    queryset = PriceAlert.objects.filter(user=user).select_related('item')
    if item_id is not None:
        queryset = queryset.filter(item_id=item_id)
    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)
    return queryset


@transaction.atomic
def deactivate_alert(*, alert_id: UUID, user: User) -> None:
    """
    Raises:
        AlertNotFoundError: If alert doesn't exist, is inactive or not owned
    """
    updated = PriceAlert.objects.filter(id=alert_id, user=user, is_active=True).update(
        is_active=False,
        updated_at=timezone.now(),
    )
    if not updated:
        raise AlertNotFoundError(f"Alert with ID {alert_id} not found")


def is_alert_triggered(
    alert: PriceAlert,
    new_price: Decimal,
    previous_price: Optional[Decimal]
) -> bool:
    """
    Decide whether a new price fires the alert.

    Target alerts fire when the price is at or below the target. Drop and
    increase alerts compare with the previous price and need a change of
    at least threshold_percentage (any change when no threshold is set).
    """
    if alert.alert_type == AlertType.TARGET_PRICE:
        return alert.target_price is not None and new_price <= alert.target_price

    if not previous_price:
        return False

    change = (new_price - previous_price) / previous_price * 100
    threshold = alert.threshold_percentage or Decimal('0')

    if alert.alert_type == AlertType.PRICE_DROP:
        return change < 0 and -change >= threshold
    if alert.alert_type == AlertType.PRICE_INCREASE:
        return change > 0 and change >= threshold
    return False


def evaluate_alerts(
    *,
    observation: PriceObservation,
    previous: Optional[PriceObservation] = None
) -> List[PriceAlert]:
    """
    Fire active alerts of the observed item in the observation's currency.

    ``previous`` is the latest active observation before this one. Its
    price is only compared when the currency matches.

    Returns:
        Alerts that fired, with last_triggered_at set
    """
    previous_price = None
    if previous is not None and previous.currency == observation.currency:
        previous_price = previous.price

    alerts = PriceAlert.objects.filter(
        item_id=observation.item_id,
        currency=observation.currency,
        is_active=True,
    )
    triggered = [
        alert for alert in alerts
        if is_alert_triggered(alert, observation.price, previous_price)
    ]

    if triggered:
        now = timezone.now()
        PriceAlert.objects.filter(id__in=[alert.id for alert in triggered]).update(
            last_triggered_at=now
        )
        for alert in triggered:
            alert.last_triggered_at = now
            logger.info(
                "Price alert %s triggered by observation %s (%s %s)",
                alert.id, observation.id, observation.price, observation.currency
            )

    return triggered
