"""Domain-specific exceptions for store services."""


class StoresServiceError(Exception):
    """Base exception for store services."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Raised when a store doesn't exist or is not available to the user."""
    pass


class DuplicateStoreError(StoresServiceError):
    """Raised when the user already has an active store with that name."""
    pass


class StorePermissionError(StoresServiceError):
    """Raised when the user may not modify the store."""
    pass


class InvalidStoreStateError(StoresServiceError):
    """Raised when a state change doesn't apply (e.g. reactivating an active store)."""
    pass
