"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from ..models import UserPreferences
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    username: str = "",
    first_name: str = "",
    last_name: str = "",
    age: int = None,
) -> User:
    """
    Register a new user together with default preferences.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        username: Optional username, derived from the email when empty
        first_name: Optional first name
        last_name: Optional last name
        age: Optional age

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email or username is taken
    """
    extra_fields = {
        'first_name': first_name,
        'last_name': last_name,
        'age': age,
    }
    if username:
        extra_fields['username'] = username

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                **extra_fields
            )
    except IntegrityError:
        raise UserRegistrationError("A user with this email or username already exists")

    UserPreferences.objects.create(user=user)

    logger.info("Registered user %s", user.id)
    return user
