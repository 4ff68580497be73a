"""Database models for public folder sharing."""

from datetime import datetime
from typing import ClassVar, Final, final, override

from django.db import models
from django.utils import timezone

from server.apps.files.models import Folder

# Constants for field max lengths
_TOKEN_MAX_LENGTH: Final = 64


@final
class Share(models.Model):
    """Public, read-only link to a folder's files.

    The token is generated by the server and is the only thing needed to
    read the folder, so it acts as a capability. A share is active until
    ``expires_at`` and expired from then on. Expired shares stay in the
    database so their links can report "expired" instead of "not found".
    """

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        related_name='shares',
    )

    token = models.CharField(
        max_length=_TOKEN_MAX_LENGTH,
        unique=True,
        editable=False,
        help_text='Random URL-safe token used in the public link',
    )

    expires_at = models.DateTimeField(
        db_index=True,
        help_text='Link stops working at this moment',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Share'  # type: ignore[mutable-override]
        verbose_name_plural = 'Shares'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.folder.name} ({self.token[:8]})'

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the share has expired.

        Args:
            now: Moment to check against, defaults to the current time.

        Returns:
            True once ``now`` reaches ``expires_at``.
        """
        if now is None:
            now = timezone.now()
        return now >= self.expires_at
