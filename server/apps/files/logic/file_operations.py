"""Business logic for file operations."""

import logging
from typing import TYPE_CHECKING, Any

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import QuerySet

from server.apps.files.infrastructure.metadata import (
    build_storage_path,
    calculate_checksum,
    detect_mime_type,
    get_file_size,
    validate_storage_path,
    validate_upload,
)
from server.apps.files.logic.ownership import get_owned_file, get_owned_folder
from server.apps.files.models import File

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def create_file(  # noqa: WPS211
    owner: _User,
    folder_id: int,
    *,
    name: str,
    stored_name: str,
    size_bytes: int,
    mime_type: str,
    checksum: str,
) -> File:
    """Create the database record for bytes that are already stored.

    Creating the record publishes the file: until then the stored bytes
    are invisible to every listing.

    Args:
        owner: Acting user, becomes the file owner.
        folder_id: ID of the owner's folder that contains the file.
        name: Original filename shown to users.
        stored_name: Storage key of the bytes.
        size_bytes: File size in bytes.
        mime_type: MIME type of the content.
        checksum: SHA256 hex digest of the content.

    Returns:
        Created File instance.

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
        ValidationError: If the storage key is outside the owner's prefix.
    """
    validate_storage_path(owner.id, stored_name)
    folder = get_owned_folder(owner, folder_id)

    file_instance = File.objects.create(
        user=owner,
        folder=folder,
        name=name,
        file=stored_name,
        size_bytes=size_bytes,
        mime_type=mime_type,
        checksum_sha256=checksum,
    )
    logger.info(
        'File record created in database: %s (ID: %d, folder: %d)',
        stored_name,
        file_instance.id,
        folder.id,
    )
    return file_instance


def upload_file(
    owner: _User,
    folder_id: int,
    uploaded_file: UploadedFile,
) -> File:
    """Upload file to storage and create database record.

    Transaction safety: Upload to storage first, then create DB record.
    If DB transaction fails, the uploaded file is deleted from storage
    (rollback).

    Args:
        owner: Acting user, becomes the file owner.
        folder_id: ID of the owner's folder receiving the file.
        uploaded_file: Uploaded file from the request.

    Returns:
        Created File instance.

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
        ValidationError: If the upload is empty, too large or not allowed.
        Exception: If upload or DB operation fails.
    """
    # Check ownership before any bytes reach storage
    folder = get_owned_folder(owner, folder_id)

    filename = uploaded_file.name or 'upload'
    mime_type = detect_mime_type(filename, uploaded_file.content_type)
    file_size = get_file_size(uploaded_file)
    validate_upload(file_size, mime_type)

    logger.info('Calculating metadata for file: %s', filename)
    checksum = calculate_checksum(uploaded_file)

    storage = _get_storage()
    storage_path = build_storage_path(owner.id, folder.id, filename)

    # Step 1: Upload to storage first
    try:
        saved_name = storage.save(storage_path, uploaded_file)
    except Exception:
        logger.exception('Failed to upload file to storage: %s', storage_path)
        raise

    # Step 2: Create database record (in transaction)
    try:
        with transaction.atomic():
            return create_file(
                owner,
                folder.id,
                name=filename,
                stored_name=saved_name,
                size_bytes=file_size,
                mime_type=mime_type,
                checksum=checksum,
            )
    except Exception:
        # Rollback: Delete file from storage since DB transaction failed
        logger.exception(
            'Database transaction failed, rolling back storage upload: %s',
            saved_name,
        )
        storage.rollback_upload(saved_name)
        raise


def get_file(owner: _User, file_id: int) -> File:
    """Get one of the owner's files, e.g. for download.

    Args:
        owner: Acting user.
        file_id: File ID.

    Returns:
        File instance.

    Raises:
        File.DoesNotExist: If file is missing or owned by someone else.
    """
    return get_owned_file(owner, file_id)


def delete_file(owner: _User, file_id: int) -> File:
    """Delete file from database and storage.

    Transaction safety: Delete DB record first. Storage deletion is handled
    by the post_delete signal handler in signals.py once the transaction
    commits.

    Args:
        owner: Acting user.
        file_id: ID of file to delete.

    Returns:
        The deleted File instance (no longer in the database).

    Raises:
        File.DoesNotExist: If file is missing or owned by someone else.
        Exception: If DB deletion fails.
    """
    try:
        file_instance = get_owned_file(owner, file_id)
    except File.DoesNotExist:
        logger.info('File not found for user %s: ID=%d', owner.username, file_id)
        raise

    logger.info(
        'Deleting file: ID=%d, path=%s',
        file_id,
        file_instance.file.name,
    )

    try:
        with transaction.atomic():
            file_instance.delete()
    except Exception:
        logger.exception('Failed to delete file from database: ID=%d', file_id)
        raise

    logger.info('File record deleted from database: ID=%d', file_id)
    return file_instance


def list_files(owner: _User, folder_id: int | None = None) -> QuerySet[File]:
    """List the owner's files.

    Args:
        owner: Acting user.
        folder_id: Optional folder ID to list only that folder's files.

    Returns:
        QuerySet of files, newest first.
    """
    files = File.objects.filter(user=owner)
    if folder_id is not None:
        files = files.filter(folder_id=folder_id)
    return files.select_related('folder')
