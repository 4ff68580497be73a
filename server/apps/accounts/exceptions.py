"""Exceptions for accounts app."""


class UserAlreadyExistsError(Exception):
    """Raised when signing up with a taken username or email."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize UserAlreadyExistsError.

        Args:
            field: Name of the conflicting field ('username' or 'email').
            message: Human readable reason shown on the signup form.
        """
        self.field = field
        super().__init__(message)
