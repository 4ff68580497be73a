"""Authentication backend that logs users in by email."""

import logging
from typing import Any, override

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.http import HttpRequest

logger = logging.getLogger(__name__)


class EmailBackend(ModelBackend):
    """Authenticate with email and password.

    The login form posts the email in the ``username`` field, the same
    way Django's ``AuthenticationForm`` does.
    """

    @override
    def authenticate(
        self,
        request: HttpRequest | None,
        username: str | None = None,
        password: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Return the user matching email and password, or None.

        Args:
            request: Current request, if any.
            username: Email address entered on the login form.
            password: Raw password.
            kwargs: Extra credentials (``email`` is accepted too).

        Returns:
            Authenticated user or None.
        """
        email = username or kwargs.get('email')
        if email is None or password is None:
            return None

        user_model = get_user_model()
        email = email.strip()
        try:
            user = user_model.objects.get(email__iexact=email)
        except user_model.MultipleObjectsReturned:
            # Emails differing only in case, from accounts made outside signup
            user = user_model.objects.filter(email=email).first()
        except user_model.DoesNotExist:
            user = None

        if user is None:
            # Run the hasher anyway to keep timing uniform
            user_model().set_password(password)
            logger.info('Login failed for unknown email')
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        logger.info('Login failed for user %s', user.username)
        return None
