"""Services for shopping lists."""

from .exceptions import (
    ShoppingServiceError,
    ShoppingListNotFoundError,
    ShoppingListItemNotFoundError,
    DuplicateListItemError,
    AlreadyPurchasedError,
)
from .shopping_list_management import (
    get_shopping_list,
    list_shopping_lists,
    create_shopping_list,
    update_shopping_list,
    deactivate_shopping_list,
)
from .list_items import (
    add_list_item,
    remove_list_item,
    mark_purchased,
)

__all__ = [
    # Exceptions
    'ShoppingServiceError',
    'ShoppingListNotFoundError',
    'ShoppingListItemNotFoundError',
    'DuplicateListItemError',
    'AlreadyPurchasedError',
    # Lists
    'get_shopping_list',
    'list_shopping_lists',
    'create_shopping_list',
    'update_shopping_list',
    'deactivate_shopping_list',
    # Entries
    'add_list_item',
    'remove_list_item',
    'mark_purchased',
]
