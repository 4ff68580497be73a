"""Public share link settings."""

from server.settings.components import config

# Validity of a share link when the owner doesn't pick one
SHARE_DEFAULT_DAYS = config('SHARE_DEFAULT_DAYS', cast=int, default=7)
SHARE_MAX_DAYS = config('SHARE_MAX_DAYS', cast=int, default=365)

# Random bytes behind each share token (32 bytes = 256 bits)
SHARE_TOKEN_BYTES = config('SHARE_TOKEN_BYTES', cast=int, default=32)
