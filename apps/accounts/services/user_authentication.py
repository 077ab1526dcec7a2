"""Email/password login."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate_user(*, email: str, password: str) -> User:
    """
    Resolve a login to a user and stamp last_login.

    The email is matched case-insensitively. Unknown emails and wrong
    passwords share one message. A deactivated account with the right
    password is reported as such.

    Raises:
        InvalidCredentialsError: If no user has this email or the password is wrong
        InactiveAccountError: If the password matches a deactivated account
    """
    user = User.objects.filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        logger.debug("Failed login for %s", email)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    return user
