# permissions.py
from rest_framework.permissions import BasePermission

from classifieds.models import Role


class IsUserAccess(BasePermission):
    """
    Authenticated access split by URL area.

    Any signed-in account may use ``/api/core/``; ``/api/admin/`` is
    reserved for moderators and admins.
    """

    def has_permission(self, request, view):
        user_id = getattr(request, "user_id", None)
        role = getattr(request, "role", None)

        if not user_id:
            return False

        if request.path.startswith("/api/admin/"):
            return role in Role.REVIEWERS

        return True


class IsModeratorAccess(BasePermission):
    message = "Moderator access required."

    def has_permission(self, request, view):
        return bool(getattr(request, "user_id", None)) and (
            getattr(request, "role", None) in Role.REVIEWERS
        )
