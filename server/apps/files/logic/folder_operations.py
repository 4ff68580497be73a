"""Business logic for folder operations."""

import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from server.apps.files.logic.ownership import get_owned_folder
from server.apps.files.models import File, Folder

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def create_folder(
    owner: _User,
    name: str,
    parent_id: int | None = None,
) -> Folder:
    """Create a folder, at the root or inside one of the owner's folders.

    The name is validated by the caller (see ``FolderForm``). Duplicate
    names under the same parent are allowed.

    Args:
        owner: Acting user, becomes the folder owner.
        name: Folder name.
        parent_id: Optional parent folder ID. None creates a root folder.

    Returns:
        Created Folder instance.

    Raises:
        Folder.DoesNotExist: If parent is missing or owned by someone else.
    """
    parent = None
    if parent_id is not None:
        parent = get_owned_folder(owner, parent_id)

    folder = Folder.objects.create(user=owner, name=name, parent=parent)
    logger.info(
        'Folder created: %s (ID: %d, parent: %s, user: %s)',
        folder.name,
        folder.id,
        parent_id,
        owner.username,
    )
    return folder


def get_folder(owner: _User, folder_id: int) -> Folder:
    """Get one of the owner's folders.

    Args:
        owner: Acting user.
        folder_id: Folder ID.

    Returns:
        Folder instance.

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
    """
    return get_owned_folder(owner, folder_id)


def list_children(
    owner: _User,
    parent_id: int | None = None,
) -> QuerySet[Folder]:
    """List the owner's folders directly under a parent.

    Args:
        owner: Acting user.
        parent_id: Parent folder ID. None lists root folders.

    Returns:
        QuerySet of folders, newest first.
    """
    return Folder.objects.filter(user=owner, parent_id=parent_id)


def get_breadcrumbs(folder: Folder) -> list[Folder]:
    """Build the path from the root folder down to ``folder``.

    Args:
        folder: Folder to build the path for.

    Returns:
        Folders ordered root first, ending with ``folder``.
    """
    crumbs = [folder]
    current = folder
    while current.parent_id is not None:
        current = current.parent
        crumbs.append(current)
    crumbs.reverse()
    return crumbs


def collect_subtree_ids(folder: Folder) -> list[int]:
    """Collect IDs of a folder and all folders nested beneath it.

    Walks the tree one level per query.

    Args:
        folder: Root of the subtree.

    Returns:
        Folder IDs, parents before children.
    """
    subtree_ids = [folder.id]
    level = [folder.id]
    while level:
        level = list(
            Folder.objects.filter(
                user_id=folder.user_id,
                parent_id__in=level,
            ).values_list('id', flat=True),
        )
        subtree_ids.extend(level)
    return subtree_ids


def delete_folder(owner: _User, folder_id: int) -> Folder:
    """Delete a folder with all its subfolders and files.

    The whole cascade runs in one transaction: either everything in the
    subtree is gone or nothing is. Stored bytes are removed after commit
    by the ``post_delete`` signal handler. Share links to any deleted
    folder are removed with it.

    Args:
        owner: Acting user.
        folder_id: ID of folder to delete.

    Returns:
        The deleted Folder instance (no longer in the database).

    Raises:
        Folder.DoesNotExist: If folder is missing or owned by someone else.
    """
    with transaction.atomic():
        folder = get_owned_folder(owner, folder_id)
        subtree_ids = collect_subtree_ids(folder)

        files_deleted, _ = File.objects.filter(
            user=owner,
            folder_id__in=subtree_ids,
        ).delete()

        Folder.objects.filter(id__in=subtree_ids).delete()

    logger.info(
        'Folder deleted: %s (ID: %d, %d folders, %d files, user: %s)',
        folder.name,
        folder_id,
        len(subtree_ids),
        files_deleted,
        owner.username,
    )
    return folder
