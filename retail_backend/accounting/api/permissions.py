# accounting/api/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission


class HasAccountingPermission(BasePermission):
    """
    Django model permissions, per action.

    Views declare:
        required_perms = {"list": "accounting.view_account", ...}

    The key is the ViewSet action, or the lowercase HTTP method for APIViews.
    "*" is the fallback. Anything unmapped is denied.
    """

    message = "You do not have permission to perform this accounting action."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False

        perms = getattr(view, "required_perms", None) or {}
        key = getattr(view, "action", None) or request.method.lower()
        if key == "metadata" or request.method == "OPTIONS":
            return True

        perm = perms.get(key, perms.get("*"))
        if not perm:
            return False
        return user.has_perm(perm)
