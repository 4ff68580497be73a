"""Shared fixtures for all tests."""

import logging

import boto3
import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with the configured bucket.

    Yields:
        boto3 S3 resource with the storage bucket created.
    """
    bucket_name = settings.STORAGES['default']['OPTIONS']['bucket_name']
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=bucket_name)

        yield conn.Bucket(bucket_name)


@pytest.fixture
def sample_upload():
    """Uploaded text file as Django receives it from a form.

    Returns:
        SimpleUploadedFile with test data.
    """
    return SimpleUploadedFile(
        'notes.txt',
        b'test file content',
        content_type='text/plain',
    )


@pytest.fixture
def server_logs(caplog, monkeypatch):
    """Capture records of the project's ``server`` logger.

    The logger doesn't propagate to the root logger, which is where
    ``caplog`` listens.

    Returns:
        The ``caplog`` fixture.
    """
    monkeypatch.setattr(logging.getLogger('server'), 'propagate', True)
    caplog.set_level(logging.INFO, logger='server')
    return caplog
