"""Services for item and category business logic."""

from .exceptions import (
    ItemsServiceError,
    ItemNotFoundError,
    DuplicateItemError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    DuplicateCategoryItemError,
    ItemNotInCategoryError,
)
from .item_management import get_item, create_item, update_item, deactivate_item
from .item_search import search_items
from .category_management import (
    get_category,
    list_categories,
    create_category,
    update_category,
    archive_category,
    add_item_to_category,
    remove_item_from_category,
)

__all__ = [
    # Exceptions
    'ItemsServiceError',
    'ItemNotFoundError',
    'DuplicateItemError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'DuplicateCategoryItemError',
    'ItemNotInCategoryError',
    # Items
    'get_item',
    'create_item',
    'update_item',
    'deactivate_item',
    'search_items',
    # Categories
    'get_category',
    'list_categories',
    'create_category',
    'update_category',
    'archive_category',
    'add_item_to_category',
    'remove_item_from_category',
]
