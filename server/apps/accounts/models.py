"""Database models for accounts app."""

from typing import Final, final, override

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models

USERNAME_MIN_LENGTH: Final = 3
USERNAME_MAX_LENGTH: Final = 20

username_validator = RegexValidator(
    regex=r'^[a-zA-Z0-9_]+$',
    message='Username can only contain letters, numbers, and underscores',
)


@final
class User(AbstractUser):
    """Account that owns folders and files.

    Both username and email are unique. Users log in with their email,
    see ``server.apps.accounts.backends.EmailBackend``.
    """

    username = models.CharField(
        max_length=USERNAME_MAX_LENGTH,
        unique=True,
        validators=[
            MinLengthValidator(USERNAME_MIN_LENGTH),
            username_validator,
        ],
        error_messages={'unique': 'Username already taken'},
    )

    email = models.EmailField(
        unique=True,
        error_messages={'unique': 'Email already registered'},
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.username
