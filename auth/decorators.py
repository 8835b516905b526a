# Authorization Dependencies for the Campaign Marketplace
# Every role-restricted route goes through require_permission

from fastapi import Depends

from database.models import UserProfile
from auth.roles import UserType, Permission, has_any_permission
from auth.dependencies import get_current_user
from services.errors import ServiceError


def require_permission(*permissions: Permission):
    """
    Dependency that requires the user to have any of the given permissions.

    Usage:
        @router.post("/campaigns/{campaign_id}/select")
        def select(
            user: UserProfile = Depends(require_permission(Permission.SELECT_APPLICANTS))
        ):
            ...
    """
    def dependency(current_user: UserProfile = Depends(get_current_user)) -> UserProfile:
        user_type = _get_user_type(current_user)

        if not has_any_permission(user_type, list(permissions)):
            raise ServiceError.unauthorized()

        return current_user

    return dependency


def _get_user_type(user: UserProfile) -> UserType:
    """Helper to extract UserType from a profile row (enum or raw string)."""
    val = user.role.value if hasattr(user.role, "value") else user.role
    return UserType(str(val).lower())
