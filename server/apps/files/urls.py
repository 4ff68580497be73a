"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),

    # Folders
    path('folder/create/', views.create_folder, name='create_folder'),
    path('folder/<int:folder_id>/', views.folder_detail, name='folder'),
    path(
        'folder/<int:folder_id>/delete/',
        views.delete_folder,
        name='delete_folder',
    ),

    # Files
    path('file/upload/', views.upload_file, name='upload'),
    path(
        'file/<int:file_id>/download/',
        views.download_file,
        name='download',
    ),
    path('file/<int:file_id>/delete/', views.delete_file, name='delete_file'),
]
