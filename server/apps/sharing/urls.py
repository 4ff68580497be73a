"""URL configuration for sharing app."""

from django.urls import path

from server.apps.sharing import views

app_name = 'sharing'

urlpatterns = [
    path(
        'folder/<int:folder_id>/share/',
        views.share_folder,
        name='share_folder',
    ),
    path('share/<str:token>/', views.shared_folder, name='shared_folder'),
    path(
        'share/<str:token>/download/<int:file_id>/',
        views.shared_file_download,
        name='shared_download',
    ),
]
