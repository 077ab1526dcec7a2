"""Domain-specific exceptions for item and category services."""


class ItemsServiceError(Exception):
    """Base exception for item services."""
    pass


class ItemNotFoundError(ItemsServiceError):
    """Raised when item doesn't exist, is inactive or belongs to someone else."""
    pass


class DuplicateItemError(ItemsServiceError):
    """Raised when the user already has an active item with the same name and brand."""
    pass


class CategoryNotFoundError(ItemsServiceError):
    """Raised when category doesn't exist, is archived or belongs to someone else."""
    pass


class DuplicateCategoryError(ItemsServiceError):
    """Raised when the user already has an active category with that name."""
    pass


class DuplicateCategoryItemError(ItemsServiceError):
    """Raised when the item is already in the category."""
    pass


class ItemNotInCategoryError(ItemsServiceError):
    """Raised when removing an item that isn't in the category."""
    pass
