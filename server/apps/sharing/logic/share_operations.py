"""Business logic for public share links.

Share links are the only way to read a folder without owning it. Instead
of the owner check every other operation performs, access is granted by
knowing an unexpired token.
"""

import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Final

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from server.apps.files.logic.ownership import get_owned_folder
from server.apps.files.models import File, Folder
from server.apps.sharing.exceptions import ShareExpiredError
from server.apps.sharing.models import Share

# User type for Django's dynamic user model
_User = Any

# token_urlsafe(48) is 64 characters, the length of Share.token
_MIN_TOKEN_BYTES: Final = 16
_MAX_TOKEN_BYTES: Final = 48

_LEADING_INTEGER: Final = re.compile(r'\s*([+-]?\d+)')

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SharedFolder:
    """Public view of a shared folder: the folder and its files."""

    share: Share
    folder: Folder
    files: QuerySet[File]


def get_default_days() -> int:
    """Get the validity of a share link when none is requested.

    Returns:
        Days from settings or default of 7.
    """
    return getattr(settings, 'SHARE_DEFAULT_DAYS', 7)


def get_max_days() -> int:
    """Get the longest validity a share link can have.

    Returns:
        Days from settings or default of 365.
    """
    return getattr(settings, 'SHARE_MAX_DAYS', 365)


def parse_share_days(raw_days: object) -> int:
    """Turn user input into a valid share duration.

    The leading integer of the input is used, so ``'2.5'`` gives 2 and
    ``'3abc'`` gives 3. Input without one falls back to the default.
    Numbers are clamped to at least one day and at most the configured
    maximum.

    Args:
        raw_days: Requested duration, usually a query string value.

    Returns:
        Number of days the share stays valid.
    """
    match = _LEADING_INTEGER.match(str(raw_days))
    if match is None:
        return get_default_days()
    return min(max(int(match.group(1)), 1), get_max_days())


def generate_token() -> str:
    """Generate an unguessable share token.

    ``SHARE_TOKEN_BYTES`` is clamped to 16..48 bytes: at least 128 bits of
    randomness and never longer than the token column.

    Returns:
        URL-safe token.
    """
    token_bytes = getattr(settings, 'SHARE_TOKEN_BYTES', 32)
    return secrets.token_urlsafe(
        min(max(token_bytes, _MIN_TOKEN_BYTES), _MAX_TOKEN_BYTES),
    )


def create_share(
    owner: _User,
    folder_id: int,
    days: object = None,
) -> Share:
    """Create a public share link for one of the owner's folders.

    Several shares may exist for the same folder at the same time.

    Args:
        owner: Acting user.
        folder_id: ID of the folder to share.
        days: Requested validity in days, parsed by ``parse_share_days``.

    Returns:
        Created Share instance.

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
    """
    folder = get_owned_folder(owner, folder_id)
    valid_days = parse_share_days(days)

    share = Share.objects.create(
        folder=folder,
        token=generate_token(),
        expires_at=timezone.now() + timedelta(days=valid_days),
    )
    logger.info(
        'Share created for folder %d by %s, valid for %d days: %s',
        folder.id,
        owner.username,
        valid_days,
        share.token[:8],
    )
    return share


def _get_active_share(token: str, now: datetime | None) -> Share:
    try:
        share = Share.objects.select_related('folder').get(token=token)
    except Share.DoesNotExist:
        logger.info('Unknown share token requested: %s', token[:8])
        raise

    if share.is_expired(now):
        logger.info('Expired share token requested: %s', token[:8])
        raise ShareExpiredError(token, share.expires_at)
    return share


def resolve_share(token: str, now: datetime | None = None) -> SharedFolder:
    """Resolve a public token to the shared folder and its files.

    No ownership check: holding an active token is the authorization.

    Args:
        token: Share token from the public link.
        now: Moment to check expiry against, defaults to the current time.

    Returns:
        SharedFolder with the folder's files, newest first.

    Raises:
        Share.DoesNotExist: If the token is unknown.
        ShareExpiredError: If the token exists but has expired.
    """
    share = _get_active_share(token, now)
    return SharedFolder(
        share=share,
        folder=share.folder,
        files=File.objects.filter(folder_id=share.folder_id),
    )


def download_shared_file(
    token: str,
    file_id: int,
    now: datetime | None = None,
) -> File:
    """Get a file through a public token.

    The file must sit directly in the shared folder; a file anywhere else
    is reported as missing even if its ID is valid.

    Args:
        token: Share token from the public link.
        file_id: ID of the requested file.
        now: Moment to check expiry against, defaults to the current time.

    Returns:
        File instance, its ``file`` field locates the stored bytes.

    Raises:
        Share.DoesNotExist: If the token is unknown.
        ShareExpiredError: If the token exists but has expired.
        File.DoesNotExist: If the file is not in the shared folder.
    """
    share = _get_active_share(token, now)
    return File.objects.get(id=file_id, folder_id=share.folder_id)
