"""Domain-specific exceptions for price services."""

from apps.stores.services.exceptions import StoreNotFoundError as StoreLookupError


class PricesServiceError(Exception):
    """Base exception for price services."""
    pass


# Not found

class PriceNotFoundError(PricesServiceError):
    """Base for lookups that found nothing (absent, inactive or not owned)."""
    pass


class PriceObservationNotFoundError(PriceNotFoundError):
    """Raised when an item has no active price observation."""
    pass


class ItemNotFoundError(PriceNotFoundError):
    """Raised when item doesn't exist, is inactive or belongs to someone else."""
    pass


class StoreNotFoundError(PriceNotFoundError, StoreLookupError):
    """Raised when store doesn't exist or is not available to the user."""
    pass


class CategoryNotFoundError(PriceNotFoundError):
    pass


class AlertNotFoundError(PriceNotFoundError):
    pass


class ReportNotFoundError(PriceNotFoundError):
    pass


# Validation

class PriceValidationError(PricesServiceError):
    """Base for invalid input to price services."""
    pass


class InvalidDateRangeError(PriceValidationError):
    """Raised when start is after end, or a date lies in the future."""
    pass


class UnsupportedCurrencyError(PriceValidationError):
    """Raised when currency is missing or not supported."""
    pass


class InvalidFilterError(PriceValidationError):
    """Raised for bad search criteria, ordering or paging."""
    pass


class InvalidPriceError(PriceValidationError):
    pass


class InvalidAlertError(PriceValidationError):
    """Raised when alert settings don't fit the alert type."""
    pass
