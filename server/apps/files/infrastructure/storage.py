"""Custom storage backend for S3-compatible storage."""

import logging
from typing import Any, final, override

from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3 storage backend for uploaded file contents.

    Extends django-storages S3Storage with:
    - Logged save and delete
    - Rollback of an upload whose database record failed
    - Best-effort deletion for cleanup after records are gone
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to S3 with error handling and logging.

        Args:
            name: Storage path for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual storage path used (may differ from name if conflicts).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        logger.info('Successfully uploaded file: %s', saved_name)
        return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage path of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise
        logger.info('Successfully deleted file: %s', name)

    def rollback_upload(self, name: str) -> None:
        """Delete uploaded file after its database record failed.

        Best effort: a failure is logged, not raised, since the database
        error that triggered the rollback is the one worth propagating.

        Args:
            name: Storage path of file to delete.
        """
        logger.warning('Rolling back upload, deleting file: %s', name)
        if not self.delete_quietly(name):
            logger.warning('Upload rollback left an orphaned file: %s', name)

    def delete_quietly(self, name: str) -> bool:
        """Delete a file whose database record is already gone.

        Args:
            name: Storage path of file to delete.

        Returns:
            True if the file was deleted, False if it was missing or
            the delete failed. Failures are logged as warnings.
        """
        try:
            if not self.exists(name):
                logger.warning(
                    'File not found in storage (already deleted?): %s',
                    name,
                )
                return False
            self.delete(name)
        except Exception:
            # Orphaned bytes, the record is gone either way
            logger.warning(
                'Failed to delete file from storage (orphaned): %s',
                name,
                exc_info=True,
            )
            return False
        return True
