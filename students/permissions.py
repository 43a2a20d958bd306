import logging

from rest_framework.permissions import SAFE_METHODS, BasePermission

logger = logging.getLogger(__name__)


def user_can_view_student(user, student_id) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_staff_role", False) or user.is_superuser:
        return True
    profile = getattr(user, "student_profile", None)
    allowed = profile is not None and str(profile.id) == str(student_id)
    if not allowed:
        logger.warning("Permission denied: user %s cannot view student %s", user.pk, student_id)
    return allowed


class IsStaffRoleOrReadOnly(BasePermission):
    """Admins and teachers write; students only read."""

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user.is_staff_role or request.user.is_superuser)
