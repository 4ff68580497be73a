"""Management command to create demo data for local development."""

import logging
from typing import Any, Final, final, override

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.urls import reverse

from server.apps.accounts.exceptions import UserAlreadyExistsError
from server.apps.accounts.logic.registration import register_user
from server.apps.files.logic.file_operations import upload_file
from server.apps.files.logic.folder_operations import create_folder
from server.apps.sharing.logic.share_operations import create_share
from server.apps.sharing.models import Share

_DEMO_USERNAME: Final = 'testuser'
_DEMO_EMAIL: Final = 'test@example.com'
_DEMO_PASSWORD: Final = 'password123'
_SAMPLE_CONTENT: Final = b'Hello from the demo file!\n'

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Create a demo user with folders, a file and a share link."""

    help = 'Create a demo user, folders, a sample file and a share link'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--flush',
            action='store_true',
            help='Delete the existing demo user and all of its data first',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the seed command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        if options['flush']:
            self._flush()

        # One transaction, so a storage failure leaves no half-built user
        with transaction.atomic():
            share = self._seed()

        share_path = reverse(
            'sharing:shared_folder',
            kwargs={'token': share.token},
        )
        self.stdout.write(
            self.style.SUCCESS(f'Created share link: {share_path}'),
        )
        logger.info('Demo data created for share %s', share.token[:8])

    def _seed(self) -> Share:
        try:
            user = register_user(_DEMO_USERNAME, _DEMO_EMAIL, _DEMO_PASSWORD)
        except UserAlreadyExistsError as exc:
            raise CommandError(
                f'{exc}. Run with --flush to recreate the demo data.',
            ) from exc
        self.stdout.write(f'Created user: {user.username} ({user.email})')

        root_folder = create_folder(user, 'My Files')
        self.stdout.write(f'Created root folder: {root_folder.name}')

        subfolder = create_folder(user, 'Documents', root_folder.id)
        self.stdout.write(f'Created subfolder: {subfolder.name}')

        sample = SimpleUploadedFile(
            'sample-file.txt',
            _SAMPLE_CONTENT,
            content_type='text/plain',
        )
        file_instance = upload_file(user, subfolder.id, sample)
        self.stdout.write(
            f'Created file: {file_instance.name} ({file_instance.size_bytes} bytes)',
        )

        return create_share(user, root_folder.id, 7)

    def _flush(self) -> None:
        user_model = get_user_model()
        with transaction.atomic():
            deleted, _ = user_model.objects.filter(email=_DEMO_EMAIL).delete()
        self.stdout.write(f'Cleared existing demo data ({deleted} records)')
