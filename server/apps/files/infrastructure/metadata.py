"""Metadata extraction and validation utilities for uploads."""

import hashlib
import mimetypes
import secrets
from pathlib import Path
from typing import BinaryIO, Final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.base import File as DjangoFile
from django.utils.text import get_valid_filename

_CHUNK_SIZE: Final = 8192  # 8KB chunks for checksum calculation
_GENERIC_MIME_TYPE: Final = 'application/octet-stream'
_STORAGE_PREFIX_BYTES: Final = 8


def detect_mime_type(filename: str, content_type: str | None = None) -> str:
    """Detect MIME type of an upload.

    The type reported by the client wins unless it is missing or generic,
    in which case the type is guessed from the filename extension.

    Args:
        filename: Filename with extension.
        content_type: Content type sent by the client, if any.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if content_type and content_type != _GENERIC_MIME_TYPE:
        return content_type
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _GENERIC_MIME_TYPE
    return mime_type


def calculate_checksum(file_obj: BinaryIO | DjangoFile) -> str:
    """Calculate SHA256 checksum of file.

    Reads file in chunks to handle large files efficiently.
    Resets file pointer to beginning after calculation.

    Args:
        file_obj: File-like object to checksum.

    Returns:
        Hex-encoded SHA256 hash string.
    """
    sha256_hash = hashlib.sha256()

    file_obj.seek(0)
    for chunk in iter(lambda: file_obj.read(_CHUNK_SIZE), b''):
        sha256_hash.update(chunk)
    file_obj.seek(0)

    return sha256_hash.hexdigest()


def get_file_size(file_obj: BinaryIO | DjangoFile) -> int:
    """Get file size from file object.

    Args:
        file_obj: File-like object.

    Returns:
        File size in bytes.
    """
    if hasattr(file_obj, 'size'):
        return file_obj.size
    file_size = len(file_obj.read())
    file_obj.seek(0)
    return file_size


def build_storage_path(user_id: int, folder_id: int, filename: str) -> str:
    """Build a unique storage key for an upload.

    Example: (7, 42, 'my report.pdf') -> '7/42/3f9a1c0e5b2d7a64-my_report.pdf'

    Args:
        user_id: Owner's user ID.
        folder_id: ID of the folder receiving the file.
        filename: Original filename.

    Returns:
        Storage path starting with the owner's ID.
    """
    safe_name = get_valid_filename(Path(filename).name)
    prefix = secrets.token_hex(_STORAGE_PREFIX_BYTES)
    return f'{user_id}/{folder_id}/{prefix}-{safe_name}'


def validate_storage_path(user_id: int, storage_path: str) -> None:
    """Validate storage path follows user isolation rules.

    Ensures the storage path starts with the user's ID to maintain
    multi-user isolation.

    Args:
        user_id: Owner's user ID.
        storage_path: Proposed storage path.

    Raises:
        ValidationError: If path doesn't start with user_id or is invalid.
    """
    if not storage_path:
        raise ValidationError('Storage path cannot be empty')

    path_parts = Path(storage_path).parts
    if '..' in path_parts:
        raise ValidationError('Storage path cannot contain ".."')

    try:
        path_user_id = int(path_parts[0])
    except ValueError as error:
        raise ValidationError(
            'Storage path must start with user ID',
        ) from error

    if path_user_id != user_id:
        raise ValidationError(
            f'Storage path user ID ({path_user_id}) does not match '
            f'owner ({user_id})',
        )


def validate_upload(size_bytes: int, mime_type: str) -> None:
    """Reject uploads that are empty, too large or of a disallowed type.

    Args:
        size_bytes: Size of the upload.
        mime_type: Detected MIME type.

    Raises:
        ValidationError: If the upload breaks a limit.
    """
    if size_bytes <= 0:
        raise ValidationError('The submitted file is empty')

    max_bytes = settings.UPLOAD_MAX_BYTES
    if size_bytes > max_bytes:
        max_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f'File size must be less than {max_mb}MB')

    if mime_type not in settings.UPLOAD_ALLOWED_MIME_TYPES:
        raise ValidationError(
            'File type not allowed. Please upload images, PDFs, '
            'documents, or videos.',
        )
