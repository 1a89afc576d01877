# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (MARKETPLACE ROLES)
# =========================================================
# GUEST: registered, not yet verified for any suite (buyer).
# SELLER: verified owner of at least one suite.
# APPROVER: reviews seller-verification applications.
# ADMIN: everything.
ROLE_GUEST = "GUEST"
ROLE_SELLER = "SELLER"
ROLE_APPROVER = "APPROVER"
ROLE_ADMIN = "ADMIN"

ALL_ROLES = {
    ROLE_GUEST,
    ROLE_SELLER,
    ROLE_APPROVER,
    ROLE_ADMIN,
}

# Roles that count as a verified suite owner for forum/directory purposes
OWNER_ROLES = {
    ROLE_SELLER,
    ROLE_APPROVER,
    ROLE_ADMIN,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_LISTINGS_CREATE = "listings.create"
CAP_LISTINGS_MANAGE_ANY = "listings.manage_any"  # act on listings owned by others

CAP_APPLICATIONS_REVIEW = "applications.review"

CAP_FORUM_POST = "forum.post"
CAP_FORUM_MODERATE = "forum.moderate"

CAP_USERS_MANAGE_ROLES = "users.manage_roles"

ALL_CAPABILITIES = {
    CAP_LISTINGS_CREATE,
    CAP_LISTINGS_MANAGE_ANY,
    CAP_APPLICATIONS_REVIEW,
    CAP_FORUM_POST,
    CAP_FORUM_MODERATE,
    CAP_USERS_MANAGE_ROLES,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_APPROVER: {
        CAP_APPLICATIONS_REVIEW,
        CAP_FORUM_POST,
    },
    ROLE_SELLER: {
        CAP_LISTINGS_CREATE,
        CAP_FORUM_POST,
    },
    ROLE_GUEST: set(),
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()

    caps = set(ROLE_CAPABILITIES.get(get_user_role(user), set()))

    # Django superusers always act as admins
    if getattr(user, "is_superuser", False):
        caps |= ALL_CAPABILITIES

    return caps


def user_has_capability(user, capability: str) -> bool:
    return capability in capabilities_for(user)


def is_admin(user) -> bool:
    return user_has_capability(user, CAP_LISTINGS_MANAGE_ANY)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_APPLICATIONS_REVIEW
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default to avoid accidental open endpoints
            return False

        return required in capabilities_for(user)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_LISTINGS_CREATE, CAP_LISTINGS_MANAGE_ANY}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = capabilities_for(user)
        return any(cap in caps for cap in set(required))


# =========================================================
# Role Permissions
# =========================================================
class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsApproverOrAdmin(BaseRolePermission):
    allowed_roles = {ROLE_APPROVER, ROLE_ADMIN}


class IsSellerOrAdmin(BaseRolePermission):
    allowed_roles = {ROLE_SELLER, ROLE_ADMIN}


class IsVerifiedOwner(BaseRolePermission):
    """Anyone past the GUEST stage."""

    allowed_roles = OWNER_ROLES
