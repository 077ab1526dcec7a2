"""Price observation lookup and filtered search."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Q

from ..models import PriceObservation, Currency
from .exceptions import (
    PriceObservationNotFoundError,
    InvalidDateRangeError,
    InvalidFilterError,
    UnsupportedCurrencyError,
)

User = get_user_model()

logger = logging.getLogger(__name__)

ORDERING_FIELDS = ('observation_date', 'price', 'created_at', 'currency')
DEFAULT_ORDERING = '-created_at'


@dataclass(frozen=True)
class PriceObservationFilter:
    """
    Search criteria for price observations.

    Every field is optional. Present fields are ANDed together, absent
    ones add no condition.
    """

    item_id: Optional[UUID] = None
    store_id: Optional[UUID] = None
    store_type: Optional[str] = None
    store_name: Optional[str] = None
    city: Optional[str] = None
    currency: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    is_active: Optional[bool] = None
    owner_id: Optional[UUID] = None

    def validate(self) -> None:
        """
        Raises:
            InvalidDateRangeError: If date_from is after date_to
            UnsupportedCurrencyError: If currency is not supported
            InvalidFilterError: If min_price is above max_price
        """
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise InvalidDateRangeError(
                f"date_from {self.date_from} must not be after date_to {self.date_to}"
            )
        if self.currency is not None and self.currency not in Currency.values:
            raise UnsupportedCurrencyError(f"Unsupported currency '{self.currency}'")
        if (self.min_price is not None and self.max_price is not None
                and self.min_price > self.max_price):
            raise InvalidFilterError("min_price must not be greater than max_price")

    def to_q(self) -> Q:
        conditions = Q()

        if self.item_id is not None:
            conditions &= Q(item_id=self.item_id)
        if self.store_id is not None:
            conditions &= Q(store_id=self.store_id)
        if self.store_type:
            conditions &= Q(store__store_type=self.store_type)
        if self.store_name:
            conditions &= Q(store__name__icontains=self.store_name)
        if self.city:
            conditions &= Q(store__city__iexact=self.city)
        if self.currency:
            conditions &= Q(currency=self.currency)
        if self.date_from is not None:
            conditions &= Q(observation_date__gte=self.date_from)
        if self.date_to is not None:
            conditions &= Q(observation_date__lte=self.date_to)
        if self.min_price is not None:
            conditions &= Q(price__gte=self.min_price)
        if self.max_price is not None:
            conditions &= Q(price__lte=self.max_price)
        if self.is_active is not None:
            conditions &= Q(is_active=self.is_active)
        if self.owner_id is not None:
            conditions &= Q(item__owner_id=self.owner_id)

        return conditions


@dataclass
class ObservationPage:
    results: List[PriceObservation] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 0
    num_pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.num_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def _resolve_ordering(ordering: str) -> str:
    ordering = ordering or DEFAULT_ORDERING
    if ordering.lstrip('-') not in ORDERING_FIELDS:
        allowed = ', '.join(ORDERING_FIELDS)
        raise InvalidFilterError(f"Cannot order by '{ordering}'. Allowed fields: {allowed}")
    return ordering


def find_by_filters(
    criteria: PriceObservationFilter,
    *,
    page: int = 1,
    page_size: Optional[int] = None,
    ordering: str = DEFAULT_ORDERING
) -> ObservationPage:
    """
    Search price observations and return one page of results.

    Args:
        criteria: Filter criteria
        page: 1-based page number
        page_size: Results per page, defaults to PRICES_PAGE_SIZE and is
            capped at PRICES_MAX_PAGE_SIZE
        ordering: Field name, optionally prefixed with '-' for descending

    Returns:
        ObservationPage. A page past the end has no results but still
        reports the total count.

    Raises:
        InvalidFilterError: Bad ordering, page or page_size
        InvalidDateRangeError: date_from after date_to
        UnsupportedCurrencyError: Unknown currency filter
    """
    criteria.validate()
    order_by = _resolve_ordering(ordering)

    if page_size is None:
        page_size = settings.PRICES_PAGE_SIZE
    if page < 1 or page_size < 1:
        raise InvalidFilterError("page and page_size must be at least 1")
    page_size = min(page_size, settings.PRICES_MAX_PAGE_SIZE)

    queryset = (
        PriceObservation.objects
        .filter(criteria.to_q())
        .select_related('item', 'store')
        .order_by(order_by, 'id')
    )

    total_count = queryset.count()
    offset = (page - 1) * page_size
    results = list(queryset[offset:offset + page_size]) if offset < total_count else []

    logger.debug("Observation search matched %s rows (page %s)", total_count, page)

    return ObservationPage(
        results=results,
        total_count=total_count,
        page=page,
        page_size=page_size,
        num_pages=math.ceil(total_count / page_size),
    )


def find_latest_active_price(*, item_id: UUID, owner: Optional[User] = None) -> PriceObservation:
    """
    Most recently created active observation of an item.

    Ordering is by creation time, not observation_date.

    Raises:
        PriceObservationNotFoundError: If the item has no active observation
    """
    queryset = PriceObservation.objects.filter(item_id=item_id, is_active=True)
    if owner is not None:
        queryset = queryset.filter(item__owner=owner)

    observation = (
        queryset
        .select_related('store')
        .order_by('-created_at', '-id')
        .first()
    )
    if observation is None:
        raise PriceObservationNotFoundError(f"No active price found for item {item_id}")

    return observation
