"""Domain-specific exceptions for shopping list services."""


class ShoppingServiceError(Exception):
    """Base exception for shopping list services."""
    pass


class ShoppingListNotFoundError(ShoppingServiceError):
    """Raised when list doesn't exist, is inactive or belongs to someone else."""
    pass


class ShoppingListItemNotFoundError(ShoppingServiceError):
    """Raised when the entry is not an active entry of the list."""
    pass


class DuplicateListItemError(ShoppingServiceError):
    """Raised when the same item and store are already on the list."""
    pass


class AlreadyPurchasedError(ShoppingServiceError):
    pass
