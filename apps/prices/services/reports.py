"""Category inflation reports."""

import calendar
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ..models import InflationReport, ReportType
from .exceptions import InvalidDateRangeError, ReportNotFoundError
from .inflation import compute_inflation, validate_date_range
from .lookups import get_active_category, validate_currency

User = get_user_model()

logger = logging.getLogger(__name__)

PERIOD_MONTHS = {
    ReportType.MONTHLY: 1,
    ReportType.QUARTERLY: 3,
    ReportType.YEARLY: 12,
}


def _shift_months(day: date, months: int) -> date:
    """Move ``day`` back by ``months``, clamping to the last day of the month."""
    month_index = day.month - 1 - months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def resolve_report_period(
    report_type: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> Tuple[date, date]:
    """
    Work out the report window.

    Custom reports use the given dates, both required. Other types end on
    end_date (today by default) and start 1, 3 or 12 months earlier.
    """
    if report_type == ReportType.CUSTOM:
        if start_date is None or end_date is None:
            raise InvalidDateRangeError("Custom reports require start_date and end_date")
        return start_date, end_date

    if report_type not in PERIOD_MONTHS:
        raise InvalidDateRangeError(f"Unknown report type '{report_type}'")

    end = end_date or timezone.localdate()
    return _shift_months(end, PERIOD_MONTHS[report_type]), end


@transaction.atomic
def generate_inflation_report(
    *,
    user: User,
    category_id: UUID,
    report_type: str,
    currency: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> InflationReport:
    """
    Average the inflation of a category's active items over a period.

    Items with insufficient data are skipped. When no item qualifies the
    report is stored with a null rate and items_included = 0.

    Raises:
        CategoryNotFoundError: If category isn't an active category of the user
        InvalidDateRangeError: If the period is invalid
        UnsupportedCurrencyError: If currency is not supported
    """
    validate_currency(currency)
    category = get_active_category(category_id=category_id, owner=user)
    start, end = resolve_report_period(report_type, start_date, end_date)
    validate_date_range(start, end)

    rates = []
    for item in category.items.filter(is_active=True):
        result = compute_inflation(
            item_id=item.id,
            currency=currency,
            start_date=start,
            end_date=end,
        )
        if result.has_sufficient_data:
            rates.append(result.inflation_rate)

    inflation_rate = None
    if rates:
        inflation_rate = (sum(rates, Decimal('0')) / len(rates)).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        )

    report = InflationReport.objects.create(
        user=user,
        category=category,
        report_type=report_type,
        currency=currency,
        start_date=start,
        end_date=end,
        inflation_rate=inflation_rate,
        items_included=len(rates),
    )

    logger.info(
        "Generated %s inflation report %s for category %s (%s items)",
        report_type, report.id, category.id, len(rates)
    )
    return report


def list_reports(*, user: User) -> QuerySet[InflationReport]:
    return InflationReport.objects.filter(user=user, is_active=True).select_related('category')


@transaction.atomic
def deactivate_report(*, report_id: UUID, user: User) -> None:
    updated = InflationReport.objects.filter(id=report_id, user=user, is_active=True).update(
        is_active=False
    )
    if not updated:
        raise ReportNotFoundError(f"Report with ID {report_id} not found")
