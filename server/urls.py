"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.
"""

from django.contrib import admin
from django.urls import include, path

from server.apps.files.views import index

admin.autodiscover()

urlpatterns = [
    path('', index, name='index'),

    # Apps:
    path('auth/', include('server.apps.accounts.urls', namespace='accounts')),
    path('', include('server.apps.files.urls', namespace='files')),
    path('', include('server.apps.sharing.urls', namespace='sharing')),

    # django-admin:
    path('admin/', admin.site.urls),
]
