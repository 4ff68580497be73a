"""Django admin configuration for sharing app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.sharing.models import Share


@admin.register(Share)
class ShareAdmin(admin.ModelAdmin[Share]):
    """Admin interface for Share model."""

    list_display = [
        'folder',
        'token_prefix',
        'expires_at',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'expires_at',
        'created_at',
    ]

    search_fields = [
        'folder__name',
        'folder__user__username',
    ]

    readonly_fields = [
        'folder',
        'token',
        'created_at',
    ]

    def token_prefix(self, obj: Share) -> str:
        """Display the first characters of the token.

        Args:
            obj: Share instance.

        Returns:
            Shortened token.
        """
        return f'{obj.token[:8]}…'
    token_prefix.short_description = 'Token'  # type: ignore[attr-defined]

    def is_active(self, obj: Share) -> bool:
        """Show whether the link still works.

        Args:
            obj: Share instance.

        Returns:
            True until the share expires.
        """
        return not obj.is_expired()
    is_active.short_description = 'Active'  # type: ignore[attr-defined]
    is_active.boolean = True  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Share]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('folder__user')
