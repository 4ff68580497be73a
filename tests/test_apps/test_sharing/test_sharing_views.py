"""Tests for sharing app views."""

import pytest
from django.urls import reverse

from server.apps.sharing.logic.share_operations import create_share
from server.apps.sharing.models import Share


def _shared_folder_url(token):
    return reverse('sharing:shared_folder', kwargs={'token': token})


@pytest.mark.django_db
def test_share_folder_view(client, user, shared_folder):
    """Test owner gets a page with the absolute share link."""
    client.force_login(user)

    response = client.get(
        reverse('sharing:share_folder', kwargs={'folder_id': shared_folder.id}),
        {'days': '3'},
    )

    assert response.status_code == 200
    share = Share.objects.get(folder=shared_folder)
    assert response.context['share_url'] == (
        f'http://testserver{_shared_folder_url(share.token)}'
    )


@pytest.mark.django_db
def test_share_folder_requires_login(client, shared_folder):
    """Test anonymous users can't create links."""
    response = client.get(
        reverse('sharing:share_folder', kwargs={'folder_id': shared_folder.id}),
    )

    assert response.status_code == 302
    assert not Share.objects.exists()


@pytest.mark.django_db
def test_share_foreign_folder_is_404(client, other_user, shared_folder):
    """Test a folder can only be shared by its owner."""
    client.force_login(other_user)

    response = client.get(
        reverse('sharing:share_folder', kwargs={'folder_id': shared_folder.id}),
    )

    assert response.status_code == 404
    assert not Share.objects.exists()


@pytest.mark.django_db
def test_shared_folder_is_public(client, user, shared_folder, shared_file):
    """Test anyone with the link sees the folder's files."""
    share = create_share(user, shared_folder.id)

    response = client.get(_shared_folder_url(share.token))

    assert response.status_code == 200
    assert response.context['folder'] == shared_folder
    assert b'beach.txt' in response.content


@pytest.mark.django_db
def test_unknown_share_is_404(client):
    """Test an unknown token is not found."""
    response = client.get(_shared_folder_url('no-such-token'))

    assert response.status_code == 404


@pytest.mark.django_db
def test_expired_share_is_410(client, expired_share):
    """Test an expired token is reported as gone, not missing."""
    response = client.get(_shared_folder_url(expired_share.token))

    assert response.status_code == 410
    assert b'expired' in response.content


@pytest.mark.django_db
def test_shared_file_download(client, user, shared_folder, shared_file):
    """Test anonymous download through an active link."""
    share = create_share(user, shared_folder.id)

    response = client.get(reverse('sharing:shared_download', kwargs={
        'token': share.token,
        'file_id': shared_file.id,
    }))

    assert response.status_code == 200
    assert b''.join(response.streaming_content) == b'sunny'


@pytest.mark.django_db
def test_shared_download_expired(client, expired_share, shared_file):
    """Test expired links don't serve files."""
    response = client.get(reverse('sharing:shared_download', kwargs={
        'token': expired_share.token,
        'file_id': shared_file.id,
    }))

    assert response.status_code == 410


@pytest.mark.django_db
def test_shared_download_unknown_file(client, user, shared_folder):
    """Test a file outside the shared folder is not found."""
    share = create_share(user, shared_folder.id)

    response = client.get(reverse('sharing:shared_download', kwargs={
        'token': share.token,
        'file_id': 99999,
    }))

    assert response.status_code == 404
