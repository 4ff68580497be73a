"""Signal handlers for files app."""

import logging
from functools import partial

from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from server.apps.files.models import File

logger = logging.getLogger(__name__)


def _delete_stored_bytes(storage_name: str) -> None:
    if default_storage.delete_quietly(storage_name):  # type: ignore[attr-defined]
        logger.info('File deleted from storage: %s', storage_name)


@receiver(post_delete, sender=File)
def delete_file_from_storage(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Delete file from storage when File record is deleted.

    Runs for single deletes, queryset deletes and folder cascades alike.
    The bytes are removed only after the surrounding transaction commits,
    so a rolled back delete never loses content. A failed storage delete
    is logged as a warning and leaves an orphaned object behind.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    if not instance.file:
        return

    storage_name = instance.file.name
    logger.info(
        'Scheduling storage delete after DB delete: %s',
        storage_name,
    )
    transaction.on_commit(partial(_delete_stored_bytes, storage_name))
