"""Exceptions for sharing app."""

from datetime import datetime


class ShareExpiredError(Exception):
    """Raised when a share token exists but its link has expired.

    Kept apart from ``Share.DoesNotExist`` so the link can be reported as
    expired rather than unknown.
    """

    def __init__(self, token: str, expires_at: datetime) -> None:
        """Initialize ShareExpiredError.

        Args:
            token: The expired share token.
            expires_at: When the share expired.
        """
        self.token = token
        self.expires_at = expires_at
        super().__init__(f'Share link expired at {expires_at.isoformat()}')
