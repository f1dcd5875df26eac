# cr_core/common/permissions.py

from __future__ import annotations

from typing import Optional

from django.core.exceptions import ObjectDoesNotExist
from rest_framework.permissions import SAFE_METHODS, BasePermission

from cr_core.iam.models import Account, Role

ROLE_PATIENT = Role.PATIENT.value
ROLE_PROVIDER = Role.PROVIDER.value
ROLE_ADMIN = Role.ADMIN.value
ROLE_SUPER_ADMIN = Role.SUPER_ADMIN.value

ADMIN_ROLES = frozenset({ROLE_ADMIN, ROLE_SUPER_ADMIN})
ALL_ROLES = frozenset({ROLE_PATIENT, ROLE_PROVIDER, ROLE_ADMIN, ROLE_SUPER_ADMIN})


def get_account(user) -> Optional[Account]:
    if not user or not getattr(user, "is_authenticated", False):
        return None
    try:
        return user.account
    except ObjectDoesNotExist:
        return None


def user_role(user) -> Optional[str]:
    """
    Resolve the caller's role:
    1) Django superuser -> SuperAdmin (covers createsuperuser accounts)
    2) Account.role
    """
    if not user or not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "is_superuser", False):
        return ROLE_SUPER_ADMIN
    account = get_account(user)
    return account.role if account else None


class BaseRolePermission(BasePermission):
    """
    Base permission class for role-based access control.

    - Requires authentication (unauthenticated -> 401 via NotAuthenticated).
    - Admin/SuperAdmin bypass unless admin_bypass is False.
    - Uses allowed_roles_per_action for strict RBAC.
    - Unknown SAFE actions fall back to list/retrieve.
    """
    message = "You do not have permission to perform this action."
    admin_bypass = True

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action: dict[str, frozenset[str] | set[str]] = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ADMIN_ROLES,
        "update": ADMIN_ROLES,
        "partial_update": ADMIN_ROLES,
        "destroy": ADMIN_ROLES,
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        role = user_role(user)
        if role is None:
            return False

        if self.admin_bypass and role in ADMIN_ROLES:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            read_action = "retrieve" if ("pk" in kwargs or "id" in kwargs) else "list"
            allowed = self.allowed_roles_per_action.get(read_action)

        if allowed is not None:
            return role in allowed

        # Unknown action => deny
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)
