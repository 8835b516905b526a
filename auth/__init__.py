# Auth module for the Campaign Marketplace
# Provides the identity provider adapter and role-based access control

from auth.roles import (
    UserType,
    Permission,
    ROLE_PERMISSIONS,
    get_permissions_for_role,
    has_any_permission,
)

from auth.identity import (
    IdentityProvider,
    IdentityProviderError,
    Token,
)

from auth.decorators import require_permission

__all__ = [
    # Roles
    "UserType",
    "Permission",
    "ROLE_PERMISSIONS",
    "get_permissions_for_role",
    "has_any_permission",

    # Identity
    "IdentityProvider",
    "IdentityProviderError",
    "Token",

    # Dependencies
    "require_permission",
]
