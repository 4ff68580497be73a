"""Views for creating and visiting public share links."""

from django.contrib.auth.decorators import login_required
from django.http import FileResponse, Http404, HttpRequest, HttpResponse
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_GET

from server.apps.files.models import File, Folder
from server.apps.files.views import stream_file
from server.apps.sharing.exceptions import ShareExpiredError
from server.apps.sharing.logic import share_operations
from server.apps.sharing.models import Share

_GONE = 410


def _render_expired(request: HttpRequest) -> HttpResponse:
    return render(request, 'sharing/expired.html', status=_GONE)


@login_required
@require_GET
def share_folder(request: HttpRequest, folder_id: int) -> HttpResponse:
    """Create a share link for a folder and show it to the owner."""
    try:
        share = share_operations.create_share(
            request.user,
            folder_id,
            request.GET.get('days'),
        )
    except Folder.DoesNotExist as error:
        raise Http404('Folder not found') from error

    share_url = request.build_absolute_uri(
        reverse('sharing:shared_folder', kwargs={'token': share.token}),
    )
    return render(request, 'sharing/created.html', {
        'share': share,
        'share_url': share_url,
    })


@require_GET
def shared_folder(request: HttpRequest, token: str) -> HttpResponse:
    """Public page listing the files of a shared folder."""
    try:
        shared = share_operations.resolve_share(token)
    except Share.DoesNotExist as error:
        raise Http404('Share link not found') from error
    except ShareExpiredError:
        return _render_expired(request)

    return render(request, 'sharing/shared.html', {
        'share': shared.share,
        'folder': shared.folder,
        'files': shared.files,
    })


@require_GET
def shared_file_download(
    request: HttpRequest,
    token: str,
    file_id: int,
) -> HttpResponse | FileResponse:
    """Public download of a file from a shared folder."""
    try:
        file_instance = share_operations.download_shared_file(token, file_id)
    except Share.DoesNotExist as error:
        raise Http404('Share link not found') from error
    except File.DoesNotExist as error:
        raise Http404('File not found') from error
    except ShareExpiredError:
        return _render_expired(request)
    return stream_file(file_instance)
