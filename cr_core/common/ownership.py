from __future__ import annotations

from typing import Any, Optional

from django.core.exceptions import ObjectDoesNotExist
from rest_framework.exceptions import NotFound, PermissionDenied

from cr_core.common.permissions import ADMIN_ROLES, ROLE_PATIENT, ROLE_PROVIDER
from cr_core.iam.models import Account

# role -> (reverse one-to-one accessor on Account, label used in the 404)
_PROFILE_ACCESSORS = {
    ROLE_PROVIDER: ("provider_profile", "Provider"),
    ROLE_PATIENT: ("patient_profile", "Patient"),
}


def caller_profile(account: Account) -> Optional[Any]:
    """Provider/Patient profile attached to the account, if any."""
    accessor = _PROFILE_ACCESSORS.get(account.role)
    if accessor is None:
        return None
    try:
        return getattr(account, accessor[0])
    except ObjectDoesNotExist:
        return None


def assert_owner(
    account: Account,
    obj: Any,
    *,
    message: str,
    provider_field: Optional[str] = "provider_id",
    patient_field: Optional[str] = "patient_id",
) -> None:
    """
    Single ownership gate for every resource.

    - Admin / SuperAdmin: always allowed.
    - Provider: provider profile id must equal obj.<provider_field>.
    - Patient: patient profile id must equal obj.<patient_field>.
    - A field of None means that role can never own the resource.

    Raises NotFound when the caller has no profile, PermissionDenied on mismatch.
    """
    role = account.role
    if role in ADMIN_ROLES or account.user.is_superuser:
        return

    owner_field = {ROLE_PROVIDER: provider_field, ROLE_PATIENT: patient_field}.get(role)
    if owner_field is None:
        raise PermissionDenied(message)

    profile = caller_profile(account)
    if profile is None:
        raise NotFound(f"{_PROFILE_ACCESSORS[role][1]} not found")

    if str(profile.pk) != str(getattr(obj, owner_field, None)):
        raise PermissionDenied(message)
