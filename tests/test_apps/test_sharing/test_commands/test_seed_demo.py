"""Tests for seed_demo management command."""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.models import File, Folder
from server.apps.sharing.models import Share

User = get_user_model()


@pytest.mark.django_db
def test_seed_demo_creates_data(mock_s3):
    """Test command creates the demo user, folders, file and share."""
    out = StringIO()

    call_command('seed_demo', stdout=out)

    demo_user = User.objects.get(email='test@example.com')
    assert demo_user.check_password('password123')
    root = Folder.objects.get(user=demo_user, parent=None)
    assert root.name == 'My Files'
    assert root.children.get().name == 'Documents'
    assert File.objects.get(user=demo_user).name == 'sample-file.txt'
    share = Share.objects.get(folder=root)
    assert f'/share/{share.token}/' in out.getvalue()


@pytest.mark.django_db
def test_seed_demo_refuses_existing_user(mock_s3):
    """Test second run without flush fails with a hint."""
    call_command('seed_demo', stdout=StringIO())

    with pytest.raises(CommandError, match='--flush'):
        call_command('seed_demo', stdout=StringIO())


@pytest.mark.django_db
def test_seed_demo_flush_recreates(mock_s3):
    """Test flush replaces the previous demo data."""
    call_command('seed_demo', stdout=StringIO())

    call_command('seed_demo', '--flush', stdout=StringIO())

    assert User.objects.filter(email='test@example.com').count() == 1
    assert Folder.objects.count() == 2
    assert File.objects.count() == 1
    assert Share.objects.count() == 1


@pytest.mark.django_db
def test_seed_demo_storage_failure_leaves_nothing(mock_s3, monkeypatch):
    """Test a failed upload rolls back the user and folders."""
    def failing_save(self, name, content):
        raise OSError('storage unavailable')

    monkeypatch.setattr(FileStorage, '_save', failing_save)

    with pytest.raises(OSError, match='storage unavailable'):
        call_command('seed_demo', stdout=StringIO())

    assert not User.objects.filter(email='test@example.com').exists()
    assert not Folder.objects.exists()
    assert not Share.objects.exists()
