"""Services for price tracking and inflation."""

from .exceptions import (
    PricesServiceError,
    PriceNotFoundError,
    PriceObservationNotFoundError,
    ItemNotFoundError,
    StoreNotFoundError,
    CategoryNotFoundError,
    AlertNotFoundError,
    ReportNotFoundError,
    PriceValidationError,
    InvalidDateRangeError,
    UnsupportedCurrencyError,
    InvalidFilterError,
    InvalidPriceError,
    InvalidAlertError,
)
from .lookups import get_active_item
from .inflation import (
    InflationCalculationResult,
    calculate_inflation_rate,
    compute_inflation,
)
from .observation_search import (
    PriceObservationFilter,
    ObservationPage,
    ORDERING_FIELDS,
    find_by_filters,
    find_latest_active_price,
)
from .observation_management import (
    record_observation,
    record_price,
    update_observation_notes,
)
from .alerts import (
    create_alert,
    list_alerts,
    deactivate_alert,
    evaluate_alerts,
)
from .reports import (
    generate_inflation_report,
    resolve_report_period,
    list_reports,
    deactivate_report,
)

__all__ = [
    # Exceptions
    'PricesServiceError',
    'PriceNotFoundError',
    'PriceObservationNotFoundError',
    'ItemNotFoundError',
    'StoreNotFoundError',
    'CategoryNotFoundError',
    'AlertNotFoundError',
    'ReportNotFoundError',
    'PriceValidationError',
    'InvalidDateRangeError',
    'UnsupportedCurrencyError',
    'InvalidFilterError',
    'InvalidPriceError',
    'InvalidAlertError',
    # Lookups
    'get_active_item',
    # Inflation
    'InflationCalculationResult',
    'calculate_inflation_rate',
    'compute_inflation',
    # Search
    'PriceObservationFilter',
    'ObservationPage',
    'ORDERING_FIELDS',
    'find_by_filters',
    'find_latest_active_price',
    # Recording
    'record_observation',
    'record_price',
    'update_observation_notes',
    # Alerts
    'create_alert',
    'list_alerts',
    'deactivate_alert',
    'evaluate_alerts',
    # Reports
    'generate_inflation_report',
    'resolve_report_period',
    'list_reports',
    'deactivate_report',
]
