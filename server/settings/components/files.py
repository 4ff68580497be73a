"""Upload validation settings."""

from server.settings.components import config

# Uploads above this size are rejected before reaching storage (10 MB)
UPLOAD_MAX_BYTES = config('UPLOAD_MAX_BYTES', cast=int, default=10 * 1024 * 1024)

UPLOAD_ALLOWED_MIME_TYPES = (
    'image/jpeg',
    'image/png',
    'image/gif',
    'image/webp',
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'text/plain',
    'video/mp4',
    'video/mpeg',
)

# Django keeps smaller uploads in memory, larger ones in a temp file
FILE_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024
