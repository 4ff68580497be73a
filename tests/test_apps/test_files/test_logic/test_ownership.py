"""Tests for owner-scoped lookups."""

import pytest

from server.apps.files.logic.ownership import get_owned_file, get_owned_folder
from server.apps.files.models import File, Folder


@pytest.mark.django_db
def test_get_owned_folder(user, root_folder):
    """Test owner gets their folder."""
    assert get_owned_folder(user, root_folder.id) == root_folder


@pytest.mark.django_db
def test_foreign_folder_looks_missing(user, other_folder):
    """Test another user's folder raises the same error as a missing one."""
    with pytest.raises(Folder.DoesNotExist):
        get_owned_folder(user, other_folder.id)

    with pytest.raises(Folder.DoesNotExist):
        get_owned_folder(user, other_folder.id + 1000)


@pytest.mark.django_db
def test_foreign_file_looks_missing(user, other_folder, make_file):
    """Test another user's file raises the same error as a missing one."""
    foreign_file = make_file(other_folder)

    with pytest.raises(File.DoesNotExist):
        get_owned_file(user, foreign_file.id)

    assert get_owned_file(other_folder.user, foreign_file.id) == foreign_file
