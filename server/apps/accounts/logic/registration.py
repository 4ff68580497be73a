"""Business logic for creating accounts."""

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from server.apps.accounts.exceptions import UserAlreadyExistsError

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def _conflict_for(email: str, username: str) -> UserAlreadyExistsError | None:
    user_model = get_user_model()
    existing = user_model.objects.filter(
        Q(email__iexact=email) | Q(username__iexact=username),
    ).first()
    if existing is None:
        return None
    if existing.email.lower() == email.lower():
        return UserAlreadyExistsError('email', 'Email already registered')
    return UserAlreadyExistsError('username', 'Username already taken')


def register_user(username: str, email: str, password: str) -> _User:
    """Create a new account with a hashed password.

    Input is expected to be validated already (see ``SignupForm``).

    Args:
        username: Unique username.
        email: Unique email address, used to log in.
        password: Raw password, stored hashed.

    Returns:
        Created user.

    Raises:
        UserAlreadyExistsError: If username or email is taken.
    """
    conflict = _conflict_for(email, username)
    if conflict is not None:
        logger.info('Signup rejected, %s already in use', conflict.field)
        raise conflict

    user_model = get_user_model()
    try:
        with transaction.atomic():
            user = user_model.objects.create_user(
                username=username,
                email=email,
                password=password,
            )
    except IntegrityError as error:
        # Lost a race with a concurrent signup
        conflict = _conflict_for(email, username)
        if conflict is None:
            raise
        raise conflict from error

    logger.info('User registered: %s (ID: %d)', user.username, user.id)
    return user
