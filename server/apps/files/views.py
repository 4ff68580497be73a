"""Views for the owner's folders and files.

Views only map HTTP to the logic layer: every lookup goes through the
owner-scoped logic functions, and a missing or foreign record becomes a
404 without telling the two apart.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import (
    FileResponse,
    Http404,
    HttpRequest,
    HttpResponse,
    HttpResponseRedirect,
)
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from server.apps.files.forms import FolderForm, UploadForm
from server.apps.files.logic import file_operations, folder_operations
from server.apps.files.models import File, Folder

logger = logging.getLogger(__name__)


def _redirect_to_folder(folder_id: int | None) -> HttpResponseRedirect:
    if folder_id is None:
        return redirect('files:dashboard')
    return redirect('files:folder', folder_id=folder_id)


def _first_error(form: UploadForm | FolderForm) -> str:
    return next(iter(form.errors.values()))[0]


@login_required
@require_GET
def dashboard(request: HttpRequest) -> HttpResponse:
    """Root folders and all files of the current user."""
    return render(request, 'files/folder.html', {
        'folders': folder_operations.list_children(request.user),
        'files': file_operations.list_files(request.user),
        'current_folder': None,
        'breadcrumbs': [],
        'folder_form': FolderForm(),
    })


@login_required
@require_GET
def folder_detail(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Subfolders and files of one of the user's folders."""
    try:
        folder = folder_operations.get_folder(request.user, folder_id)
    except Folder.DoesNotExist as error:
        raise Http404('Folder not found') from error

    return render(request, 'files/folder.html', {
        'folders': folder_operations.list_children(request.user, folder.id),
        'files': file_operations.list_files(request.user, folder.id),
        'current_folder': folder,
        'breadcrumbs': folder_operations.get_breadcrumbs(folder),
        'folder_form': FolderForm(initial={'parent_id': folder.id}),
    })


@login_required
@require_POST
def create_folder(request: HttpRequest) -> HttpResponse:
    """Create a folder at the root or inside another folder."""
    form = FolderForm(request.POST)
    if not form.is_valid():
        return render(
            request,
            'error.html',
            {'message': _first_error(form)},
            status=400,
        )

    parent_id = form.cleaned_data['parent_id']
    try:
        folder_operations.create_folder(
            request.user,
            form.cleaned_data['name'],
            parent_id,
        )
    except Folder.DoesNotExist as error:
        raise Http404('Folder not found') from error
    return _redirect_to_folder(parent_id)


@login_required
@require_POST
def delete_folder(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Delete a folder with everything inside it."""
    try:
        folder = folder_operations.delete_folder(request.user, folder_id)
    except Folder.DoesNotExist as error:
        raise Http404('Folder not found') from error

    messages.success(request, f'Folder "{folder.name}" deleted')
    return _redirect_to_folder(folder.parent_id)


@login_required
@require_POST
def upload_file(request: HttpRequest) -> HttpResponse:
    """Upload a file into one of the user's folders."""
    form = UploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return render(
            request,
            'error.html',
            {'message': _first_error(form)},
            status=400,
        )

    folder_id = form.cleaned_data['folder_id']
    try:
        file_operations.upload_file(
            request.user,
            folder_id,
            form.cleaned_data['file'],
        )
    except Folder.DoesNotExist as error:
        raise Http404('Folder not found') from error
    return _redirect_to_folder(folder_id)


@login_required
@require_GET
def download_file(request: HttpRequest, file_id: int) -> FileResponse:
    """Stream one of the user's files as an attachment."""
    try:
        file_instance = file_operations.get_file(request.user, file_id)
    except File.DoesNotExist as error:
        raise Http404('File not found') from error
    return stream_file(file_instance)


@login_required
@require_POST
def delete_file(request: HttpRequest, file_id: int) -> HttpResponse:
    """Delete one of the user's files."""
    try:
        file_instance = file_operations.delete_file(request.user, file_id)
    except File.DoesNotExist as error:
        raise Http404('File not found') from error
    return _redirect_to_folder(file_instance.folder_id)


def stream_file(file_instance: File) -> FileResponse:
    """Build a download response for a file's stored bytes.

    Args:
        file_instance: File to send.

    Returns:
        Streaming response with the original filename.
    """
    logger.info('Streaming file: %s (ID: %d)', file_instance.name, file_instance.id)
    return FileResponse(
        file_instance.file.open('rb'),
        as_attachment=True,
        filename=file_instance.name,
        content_type=file_instance.mime_type,
    )


@require_GET
def index(request: HttpRequest) -> HttpResponse:
    """Landing page; logged in users go straight to their dashboard."""
    if request.user.is_authenticated:
        return redirect('files:dashboard')
    return render(request, 'index.html')
