# Role-Based Access Control for the Campaign Marketplace
# This module defines user roles and the permissions each one grants

from enum import Enum
from typing import List, Set


class UserType(str, Enum):
    """User types in the marketplace. Chosen once at signup."""
    ADVERTISER = "advertiser"
    INFLUENCER = "influencer"


class Permission(str, Enum):
    """Fine-grained permissions checked by the API routes."""

    # Advertiser permissions
    CREATE_CAMPAIGNS = "create_campaigns"
    MANAGE_OWN_CAMPAIGNS = "manage_own_campaigns"
    REVIEW_APPLICANTS = "review_applicants"
    SELECT_APPLICANTS = "select_applicants"

    # Influencer permissions
    APPLY_TO_CAMPAIGNS = "apply_to_campaigns"
    VIEW_OWN_APPLICATIONS = "view_own_applications"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserType, Set[Permission]] = {
    UserType.ADVERTISER: {
        Permission.CREATE_CAMPAIGNS,
        Permission.MANAGE_OWN_CAMPAIGNS,
        Permission.REVIEW_APPLICANTS,
        Permission.SELECT_APPLICANTS,
    },

    UserType.INFLUENCER: {
        Permission.APPLY_TO_CAMPAIGNS,
        Permission.VIEW_OWN_APPLICATIONS,
    },
}


def get_permissions_for_role(user_type: UserType) -> Set[Permission]:
    """Get all permissions for a given user type."""
    return ROLE_PERMISSIONS.get(user_type, set())


def has_any_permission(user_type: UserType, permissions: List[Permission]) -> bool:
    """Check if a user type has any of the given permissions."""
    user_permissions = get_permissions_for_role(user_type)
    return any(p in user_permissions for p in permissions)
