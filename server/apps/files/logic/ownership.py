"""Owner-scoped lookups.

A record that exists but belongs to someone else is reported with the same
``DoesNotExist`` as a record that doesn't exist, so callers can't probe for
other users' folders and files.
"""

from typing import Any

from server.apps.files.models import File, Folder

# User type for Django's dynamic user model
_User = Any


def get_owned_folder(owner: _User, folder_id: int) -> Folder:
    """Get a folder owned by ``owner``.

    Args:
        owner: Acting user.
        folder_id: Folder ID.

    Returns:
        Folder instance.

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
    """
    return Folder.objects.get(id=folder_id, user=owner)


def get_owned_file(owner: _User, file_id: int) -> File:
    """Get a file owned by ``owner``.

    Args:
        owner: Acting user.
        file_id: File ID.

    Returns:
        File instance.

    Raises:
        File.DoesNotExist: If file is missing or owned by someone else.
    """
    return File.objects.get(id=file_id, user=owner)
