"""Account management service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from .exceptions import PasswordConfirmationError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def update_user_profile(*, user: User, data: dict) -> User:
    """Update editable profile fields (username, names, age)."""
    allowed_fields = ['username', 'first_name', 'last_name', 'age']
    update_fields = []

    for field in allowed_fields:
        if field in data:
            setattr(user, field, data[field])
            update_fields.append(field)

    if update_fields:
        update_fields.append('updated_at')
        user.save(update_fields=update_fields)

    return user


@transaction.atomic
def deactivate_user_account(*, user_id: UUID, password: str) -> None:
    """
    Deactivate an account after password confirmation.

    Items, stores and price history owned by the user are kept.

    Raises:
        UserNotFoundError: If user doesn't exist or is already inactive
        PasswordConfirmationError: If password is incorrect
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    user.deactivate()
    logger.info("Deactivated user %s", user_id)
