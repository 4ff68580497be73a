"""Shared fixtures for files app tests."""

import pytest

from server.apps.files.models import File, Folder


@pytest.fixture
def root_folder(user):
    """Create a root folder for the test user.

    Returns:
        Folder without parent.
    """
    return Folder.objects.create(user=user, name='Documents')


@pytest.fixture
def subfolder(user, root_folder):
    """Create a folder inside ``root_folder``.

    Returns:
        Folder with ``root_folder`` as parent.
    """
    return Folder.objects.create(user=user, name='Reports', parent=root_folder)


@pytest.fixture
def other_folder(other_user):
    """Create a root folder owned by the other user.

    Returns:
        Folder of ``other_user``.
    """
    return Folder.objects.create(user=other_user, name='Private')


@pytest.fixture
def make_file(mock_s3):
    """Factory creating a File record together with its stored bytes.

    Returns:
        Callable taking a folder and optional name and content.
    """
    def factory(folder, name='test.txt', content=b'test file content'):
        storage_path = f'{folder.user_id}/{folder.id}/{name}'
        mock_s3.put_object(Key=storage_path, Body=content)
        return File.objects.create(
            user=folder.user,
            folder=folder,
            name=name,
            file=storage_path,
            size_bytes=len(content),
            mime_type='text/plain',
            checksum_sha256='a' * 64,
        )
    return factory
