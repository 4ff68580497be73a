"""Shared fixtures for sharing app tests."""

from datetime import timedelta

import pytest
from django.utils import timezone

from server.apps.files.models import File, Folder
from server.apps.sharing.models import Share


@pytest.fixture
def shared_folder(user):
    """Folder of the test user that gets shared.

    Returns:
        Root Folder instance.
    """
    return Folder.objects.create(user=user, name='Holiday')


@pytest.fixture
def shared_file(shared_folder, mock_s3):
    """File stored inside ``shared_folder``.

    Returns:
        File instance whose bytes exist in the mocked bucket.
    """
    storage_path = f'{shared_folder.user_id}/{shared_folder.id}/beach.txt'
    mock_s3.put_object(Key=storage_path, Body=b'sunny')
    return File.objects.create(
        user=shared_folder.user,
        folder=shared_folder,
        name='beach.txt',
        file=storage_path,
        size_bytes=5,
        mime_type='text/plain',
        checksum_sha256='b' * 64,
    )


@pytest.fixture
def expired_share(shared_folder):
    """Share of ``shared_folder`` that expired an hour ago.

    Returns:
        Share instance.
    """
    return Share.objects.create(
        folder=shared_folder,
        token='expired-token',
        expires_at=timezone.now() - timedelta(hours=1),
    )
