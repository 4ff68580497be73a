"""Database models for files app."""

from pathlib import Path
from typing import Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
FOLDER_NAME_MAX_LENGTH: Final = 100
_FILE_NAME_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 512
_MIME_TYPE_MAX_LENGTH: Final = 255
_CHECKSUM_MAX_LENGTH: Final = 64  # SHA256 hex length


@final
class Folder(models.Model):
    """Folder in a user's tree.

    Folders without a parent are root folders. A folder keeps its owner
    and parent for its whole life, so every user's folders form a forest.
    Deleting a folder removes its subfolders, files and share links.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        related_name='children',
        null=True,
        blank=True,
    )

    name = models.CharField(
        max_length=FOLDER_NAME_MAX_LENGTH,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            # Optimize child listing queries
            models.Index(
                fields=['user', 'parent'],
                name='folders_user_parent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    @property
    def is_root(self) -> bool:
        """Whether the folder sits at the top of the user's tree."""
        return self.parent_id is None


@final
class File(models.Model):
    """Uploaded file stored in S3-compatible storage.

    Each file belongs to a user and lives in exactly one of that user's
    folders. ``file`` holds the storage key of the bytes, ``name`` the
    original filename shown to users.
    """

    # Owner relationship
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        related_name='files',
    )

    name = models.CharField(
        max_length=_FILE_NAME_MAX_LENGTH,
        help_text='Original filename as uploaded',
    )

    # upload_to='' means we control the full path
    file = models.FileField(
        upload_to='',
        max_length=_STORAGE_KEY_MAX_LENGTH,
        help_text='Path in storage: {user_id}/{folder_id}/{random}-name.ext',
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
    )

    checksum_sha256 = models.CharField(
        max_length=_CHECKSUM_MAX_LENGTH,
        help_text='SHA256 hash for integrity verification',
        db_index=True,
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-uploaded_at', '-id']

        indexes = [
            # Optimize folder listing queries
            models.Index(
                fields=['user', 'folder'],
                name='files_user_folder_idx',
            ),
            # Optimize recent files queries
            models.Index(
                fields=['user', '-uploaded_at'],
                name='files_user_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    def get_extension(self) -> str:
        """Extract file extension from the original name.

        Example: 'report.PDF' -> 'pdf'

        Returns:
            Extension without dot (lowercase).
        """
        extension = Path(self.name).suffix
        return extension.lstrip('.').lower()

    def get_url(self) -> str:
        """Get download URL for file.

        Returns:
            Full URL to access file via storage backend.
        """
        return self.file.url
