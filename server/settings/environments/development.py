"""Overriding settings for local development.

This file should not be used in production.
"""

from typing import Final

DEBUG = True

ALLOWED_HOSTS: Final = [
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
    'testserver',
]
