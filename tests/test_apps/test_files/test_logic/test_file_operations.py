"""Tests for file operations business logic."""

import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError

from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.logic import file_operations
from server.apps.files.logic.file_operations import (
    create_file,
    delete_file,
    get_file,
    list_files,
    upload_file,
)
from server.apps.files.models import File, Folder


def _stored_keys(bucket):
    return [stored.key for stored in bucket.objects.all()]


@pytest.mark.django_db
def test_upload_file(user, root_folder, sample_upload, mock_s3):
    """Test upload stores bytes and metadata."""
    file_instance = upload_file(user, root_folder.id, sample_upload)

    assert file_instance.user == user
    assert file_instance.folder == root_folder
    assert file_instance.name == 'notes.txt'
    assert file_instance.size_bytes == len(b'test file content')
    assert file_instance.mime_type == 'text/plain'
    assert len(file_instance.checksum_sha256) == 64
    assert file_instance.file.name.startswith(f'{user.id}/{root_folder.id}/')
    assert _stored_keys(mock_s3) == [file_instance.file.name]


@pytest.mark.django_db
def test_upload_then_list_then_download(user, root_folder, sample_upload, mock_s3):
    """Test an uploaded file can be listed and read back."""
    uploaded = upload_file(user, root_folder.id, sample_upload)

    assert list(list_files(user, root_folder.id)) == [uploaded]

    with get_file(user, uploaded.id).file.open('rb') as stored:
        assert stored.read() == b'test file content'


@pytest.mark.django_db
def test_upload_into_foreign_folder(user, other_folder, sample_upload, mock_s3):
    """Test upload into another user's folder stores nothing."""
    with pytest.raises(Folder.DoesNotExist):
        upload_file(user, other_folder.id, sample_upload)

    assert not File.objects.exists()
    assert _stored_keys(mock_s3) == []


@pytest.mark.django_db
def test_upload_empty_file(user, root_folder, mock_s3):
    """Test empty upload is rejected before storage."""
    empty = SimpleUploadedFile('empty.txt', b'', content_type='text/plain')

    with pytest.raises(ValidationError, match='empty'):
        upload_file(user, root_folder.id, empty)

    assert _stored_keys(mock_s3) == []


@pytest.mark.django_db
def test_upload_disallowed_type(user, root_folder, mock_s3):
    """Test executable upload is rejected."""
    binary = SimpleUploadedFile(
        'tool.exe',
        b'MZ',
        content_type='application/x-msdownload',
    )

    with pytest.raises(ValidationError, match='File type not allowed'):
        upload_file(user, root_folder.id, binary)

    assert not File.objects.exists()


@pytest.mark.django_db
def test_upload_too_large(user, root_folder, mock_s3, settings):
    """Test upload over the size limit is rejected."""
    settings.UPLOAD_MAX_BYTES = 4

    with pytest.raises(ValidationError, match='File size must be less than'):
        upload_file(
            user,
            root_folder.id,
            SimpleUploadedFile('a.txt', b'12345', content_type='text/plain'),
        )


@pytest.mark.django_db
def test_upload_rolls_back_bytes_on_db_failure(
    user,
    root_folder,
    sample_upload,
    mock_s3,
    monkeypatch,
):
    """Test stored bytes are removed when the record can't be created."""
    def failing_create_file(*args, **kwargs):
        raise IntegrityError('database unavailable')

    monkeypatch.setattr(file_operations, 'create_file', failing_create_file)

    with pytest.raises(IntegrityError):
        upload_file(user, root_folder.id, sample_upload)

    assert not File.objects.exists()
    assert _stored_keys(mock_s3) == []


@pytest.mark.django_db
def test_create_file_rejects_foreign_storage_path(user, root_folder):
    """Test record can't point at another user's storage prefix."""
    with pytest.raises(ValidationError):
        create_file(
            user,
            root_folder.id,
            name='a.txt',
            stored_name=f'{user.id + 1}/1/a.txt',
            size_bytes=1,
            mime_type='text/plain',
            checksum='a' * 64,
        )


@pytest.mark.django_db
def test_list_files_only_own(user, root_folder, other_folder, make_file):
    """Test listing never includes other users' files."""
    own_file = make_file(root_folder)
    make_file(other_folder)

    assert list(list_files(user)) == [own_file]


@pytest.mark.django_db
def test_list_files_by_folder(user, root_folder, subfolder, make_file):
    """Test folder filter lists only that folder's files."""
    make_file(root_folder, name='root.txt')
    nested = make_file(subfolder, name='nested.txt')

    assert list(list_files(user, subfolder.id)) == [nested]
    assert list_files(user).count() == 2


@pytest.mark.django_db
def test_get_foreign_file(user, other_folder, make_file):
    """Test downloading another user's file fails as if it were missing."""
    foreign_file = make_file(other_folder)

    with pytest.raises(File.DoesNotExist):
        get_file(user, foreign_file.id)


@pytest.mark.django_db(transaction=True)
def test_delete_file(user, root_folder, make_file, mock_s3):
    """Test delete removes metadata and stored bytes."""
    file_instance = make_file(root_folder)

    deleted = delete_file(user, file_instance.id)

    assert deleted.name == 'test.txt'
    assert not File.objects.exists()
    assert _stored_keys(mock_s3) == []


@pytest.mark.django_db
def test_delete_file_twice(user, root_folder, make_file, mock_s3):
    """Test second delete reports the file as missing."""
    file_instance = make_file(root_folder)
    delete_file(user, file_instance.id)

    with pytest.raises(File.DoesNotExist):
        delete_file(user, file_instance.id)


@pytest.mark.django_db
def test_delete_foreign_file(user, other_folder, make_file, mock_s3):
    """Test other user's file can't be deleted."""
    foreign_file = make_file(other_folder)

    with pytest.raises(File.DoesNotExist):
        delete_file(user, foreign_file.id)

    assert File.objects.filter(id=foreign_file.id).exists()


@pytest.mark.django_db(transaction=True)
def test_delete_file_storage_failure_keeps_metadata_deleted(
    user,
    root_folder,
    make_file,
    mock_s3,
    monkeypatch,
    server_logs,
):
    """Test a failing storage delete is logged and the record stays gone."""
    file_instance = make_file(root_folder)

    def failing_delete(self, name):
        raise OSError('storage unavailable')

    monkeypatch.setattr(FileStorage, 'delete', failing_delete)

    delete_file(user, file_instance.id)

    assert not File.objects.exists()
    assert _stored_keys(mock_s3) == [file_instance.file.name]
    assert 'orphaned' in server_logs.text
