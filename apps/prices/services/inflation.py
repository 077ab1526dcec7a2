"""Inflation calculation over an item's price history."""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP
from typing import Optional, Dict, Any
from uuid import UUID

from django.contrib.auth import get_user_model
from django.utils import timezone

from ..models import PriceObservation
from .exceptions import InvalidDateRangeError
from .lookups import get_active_item, validate_currency

User = get_user_model()

logger = logging.getLogger(__name__)

RATIO_PLACES = Decimal('0.0000000001')
RATE_PLACES = Decimal('0.01')

NOT_ENOUGH_OBSERVATIONS = (
    "Not enough price observations in the given date range to calculate inflation. "
    "At least 2 are required."
)
ZERO_STARTING_PRICE = (
    "The earliest price in the given date range is zero, so a percentage change "
    "cannot be calculated."
)


@dataclass(frozen=True)
class InflationCalculationResult:
    """
    Outcome of an inflation calculation.

    When there is not enough data the price fields are None and
    ``insufficient_data_message`` explains why. That is a normal result,
    not an error.
    """

    currency: str
    start_date: date
    end_date: date
    started_price: Optional[Decimal] = None
    last_price: Optional[Decimal] = None
    price_difference: Optional[Decimal] = None
    inflation_rate: Optional[Decimal] = None
    observations_count: int = 0
    insufficient_data_message: Optional[str] = None

    @classmethod
    def insufficient_data(
        cls,
        *,
        currency: str,
        start_date: date,
        end_date: date,
        observations_count: int = 0,
        reason: str = NOT_ENOUGH_OBSERVATIONS
    ) -> 'InflationCalculationResult':
        return cls(
            currency=currency,
            start_date=start_date,
            end_date=end_date,
            observations_count=observations_count,
            insufficient_data_message=reason,
        )

    @property
    def has_sufficient_data(self) -> bool:
        return self.insufficient_data_message is None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['has_sufficient_data'] = self.has_sufficient_data
        return data


def calculate_inflation_rate(started_price: Decimal, last_price: Decimal) -> Decimal:
    """
    Percentage change from started_price to last_price.

    The ratio is taken at 10 decimal places (banker's rounding), then
    scaled to a percentage and rounded half-up to 2 places.
    """
    ratio = ((last_price - started_price) / started_price).quantize(
        RATIO_PLACES, rounding=ROUND_HALF_EVEN
    )
    return (ratio * 100).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def validate_date_range(start_date: date, end_date: date) -> None:
    """
    Raises:
        InvalidDateRangeError: If a date is missing, start is after end,
            or start is in the future
    """
    if start_date is None or end_date is None:
        raise InvalidDateRangeError("Both start_date and end_date are required")
    if start_date > end_date:
        raise InvalidDateRangeError(
            f"start_date {start_date} must not be after end_date {end_date}"
        )
    if start_date > timezone.localdate():
        raise InvalidDateRangeError(f"start_date {start_date} is in the future")


def compute_inflation(
    *,
    item_id: UUID,
    currency: str,
    start_date: date,
    end_date: date,
    owner: Optional[User] = None
) -> InflationCalculationResult:
    """
    Compute the price change of an item between two dates.

    Uses every observation of the item in ``currency`` whose
    observation_date lies in [start_date, end_date]. Inactive observations
    are included since they are still price history. The earliest and
    latest of them (by observation_date) are compared.

    Args:
        item_id: Item UUID
        currency: Currency code, e.g. 'EUR'
        start_date: First day of the window (inclusive)
        end_date: Last day of the window (inclusive)
        owner: When given, the item must belong to this user

    Returns:
        InflationCalculationResult, possibly an insufficient-data result

    Raises:
        InvalidDateRangeError: If the range is invalid
        UnsupportedCurrencyError: If currency is missing or unsupported
        ItemNotFoundError: If item doesn't exist, is inactive or not owned
    """
    validate_date_range(start_date, end_date)
    validate_currency(currency)
    item = get_active_item(item_id=item_id, owner=owner)

    prices = list(
        PriceObservation.objects
        .filter(
            item=item,
            currency=currency,
            observation_date__gte=start_date,
            observation_date__lte=end_date,
        )
        .order_by('observation_date', 'created_at')
        .values_list('price', flat=True)
    )

    if len(prices) < 2:
        logger.debug(
            "Insufficient data for item %s in %s (%s observations)",
            item.id, currency, len(prices)
        )
        return InflationCalculationResult.insufficient_data(
            currency=currency,
            start_date=start_date,
            end_date=end_date,
            observations_count=len(prices),
        )

    started_price, last_price = prices[0], prices[-1]

    if started_price == 0:
        return InflationCalculationResult.insufficient_data(
            currency=currency,
            start_date=start_date,
            end_date=end_date,
            observations_count=len(prices),
            reason=ZERO_STARTING_PRICE,
        )

    return InflationCalculationResult(
        currency=currency,
        start_date=start_date,
        end_date=end_date,
        started_price=started_price,
        last_price=last_price,
        price_difference=last_price - started_price,
        inflation_rate=calculate_inflation_rate(started_price, last_price),
        observations_count=len(prices),
    )
