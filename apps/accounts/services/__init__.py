"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    PasswordConfirmationError,
    PreferredStoreError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import update_user_profile, deactivate_user_account
from .preferences import (
    get_preferences,
    update_preferences,
    reset_preferences,
    toggle_preferred_store,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'PreferredStoreError',
    # Services
    'register_user',
    'authenticate_user',
    'update_user_profile',
    'deactivate_user_account',
    'get_preferences',
    'update_preferences',
    'reset_preferences',
    'toggle_preferred_store',
]
