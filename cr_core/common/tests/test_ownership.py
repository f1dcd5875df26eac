# cr_core/common/tests/test_ownership.py
from types import SimpleNamespace

import pytest
from rest_framework.exceptions import NotFound, PermissionDenied

from cr_core.common.ownership import assert_owner
from cr_core.iam.models import Role

pytestmark = pytest.mark.django_db

MSG = "You do not own this thing"


def test_admin_bypasses(admin_account):
    assert_owner(admin_account, SimpleNamespace(provider_id=None, patient_id=None), message=MSG)


def test_superuser_bypasses(make_account):
    account = make_account(Role.PATIENT)
    account.user.is_superuser = True
    account.user.save()
    assert_owner(account, SimpleNamespace(provider_id="x", patient_id="y"), message=MSG)


def test_provider_owner_passes(provider_account, provider):
    assert_owner(provider_account, SimpleNamespace(provider_id=provider.id), message=MSG)


def test_provider_mismatch_is_forbidden(provider_account, provider, other_provider):
    with pytest.raises(PermissionDenied) as exc:
        assert_owner(provider_account, SimpleNamespace(provider_id=other_provider.id), message=MSG)
    assert str(exc.value.detail) == MSG


def test_provider_without_profile_is_not_found(provider_account):
    with pytest.raises(NotFound) as exc:
        assert_owner(provider_account, SimpleNamespace(provider_id="anything"), message=MSG)
    assert str(exc.value.detail) == "Provider not found"


def test_patient_owner_passes(patient_account, patient):
    assert_owner(patient_account, SimpleNamespace(provider_id=None, patient_id=patient.id), message=MSG)


def test_patient_denied_when_resource_is_provider_only(patient_account, patient):
    with pytest.raises(PermissionDenied):
        assert_owner(
            patient_account,
            SimpleNamespace(provider_id=None, patient_id=patient.id),
            message=MSG,
            patient_field=None,
        )
