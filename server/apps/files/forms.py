"""Forms validating folder and upload input before it reaches the logic."""

from django import forms
from django.core.files.uploadedfile import UploadedFile

from server.apps.files.infrastructure.metadata import (
    detect_mime_type,
    validate_upload,
)
from server.apps.files.models import FOLDER_NAME_MAX_LENGTH


class FolderForm(forms.Form):
    """Name and optional parent of a new folder."""

    name = forms.CharField(
        max_length=FOLDER_NAME_MAX_LENGTH,
        error_messages={
            'required': 'Folder name is required',
            'max_length': 'Folder name must be between 1 and 100 characters',
        },
    )
    parent_id = forms.IntegerField(required=False, min_value=1)


class UploadForm(forms.Form):
    """Target folder and content of an upload."""

    folder_id = forms.IntegerField(
        min_value=1,
        error_messages={'required': 'Folder ID is required'},
    )
    file = forms.FileField(
        error_messages={'required': 'Please select a file to upload'},
    )

    def clean_file(self) -> UploadedFile:
        """Enforce the size limit and the allowed MIME types."""
        uploaded_file = self.cleaned_data['file']
        mime_type = detect_mime_type(
            uploaded_file.name,
            uploaded_file.content_type,
        )
        validate_upload(uploaded_file.size, mime_type)
        return uploaded_file
