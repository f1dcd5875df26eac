# cr_core/conftest.py
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from cr_core.branches.models import Branch
from cr_core.encounters.models import Encounter, EncounterType
from cr_core.iam.models import Account, Role
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider

DEFAULT_PASSWORD = "Pass@12345"


@pytest.fixture
def make_account(db):
    """
    Factory: make_account(role, email=None, verified=True) -> Account
    Username mirrors email, like self-registered accounts.
    """
    User = get_user_model()
    counter = {"n": 0}

    def _make(role=Role.PATIENT, email=None, *, verified=True, password=DEFAULT_PASSWORD):
        counter["n"] += 1
        email = email or f"{str(role).lower()}{counter['n']}@example.com"
        user = User.objects.create_user(username=email, email=email, password=password)
        return Account.objects.create(user=user, role=role, is_email_verified=verified)

    return _make


@pytest.fixture
def admin_account(make_account):
    return make_account(Role.ADMIN, "admin@example.com")


@pytest.fixture
def provider_account(make_account):
    return make_account(Role.PROVIDER, "provider@example.com")


@pytest.fixture
def other_provider_account(make_account):
    return make_account(Role.PROVIDER, "other.provider@example.com")


@pytest.fixture
def patient_account(make_account):
    return make_account(Role.PATIENT, "patient@example.com")


@pytest.fixture
def provider(provider_account):
    return Provider.objects.create(account=provider_account, name="Good Health Clinic", type="clinic")


@pytest.fixture
def other_provider(other_provider_account):
    return Provider.objects.create(account=other_provider_account, name="Other Clinic", type="clinic")


@pytest.fixture
def patient(patient_account):
    return Patient.objects.create(account=patient_account, first_name="Ada", last_name="Obi")


@pytest.fixture
def branch(provider):
    return Branch.objects.create(provider=provider, name="Main Branch", email="main@clinic.test")


@pytest.fixture
def make_encounter(provider, patient):
    def _make(**overrides):
        data = {
            "provider": provider,
            "patient": patient,
            "encounter_type": EncounterType.CONSULTATION,
            "scheduled_date": timezone.now() - timedelta(hours=1),
        }
        data.update(overrides)
        return Encounter.objects.create(**data)

    return _make


@pytest.fixture
def encounter(make_encounter):
    return make_encounter()


@pytest.fixture
def api_client():
    """
    Factory: api_client(account=None) -> APIClient
    With an account the client is force-authenticated as that account's user.
    """

    def _client(account=None):
        client = APIClient()
        if account is not None:
            client.force_authenticate(user=account.user)
        return client

    return _client
