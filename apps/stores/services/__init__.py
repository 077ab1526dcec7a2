"""Services for store business logic."""

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
    DuplicateStoreError,
    StorePermissionError,
    InvalidStoreStateError,
)
from .store_search import get_available_store, search_stores
from .store_management import (
    create_store,
    update_store,
    deactivate_store,
    reactivate_store,
    delete_global_store,
)

__all__ = [
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',
    'DuplicateStoreError',
    'StorePermissionError',
    'InvalidStoreStateError',
    # Search
    'get_available_store',
    'search_stores',
    # Management
    'create_store',
    'update_store',
    'deactivate_store',
    'reactivate_store',
    'delete_global_store',
]
