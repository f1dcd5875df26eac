# cr_core/iam/tests/test_accounts.py
import pytest
from django.contrib.auth import get_user_model

from cr_core.iam.models import Account, Role

pytestmark = pytest.mark.django_db


def test_accounts_list_is_admin_only(api_client, admin_account, patient_account, provider_account):
    denied = api_client(patient_account).get("/api/v1/accounts/")
    assert denied.status_code == 403

    res = api_client(admin_account).get("/api/v1/accounts/")
    assert res.status_code == 200
    data = res.json()["responseObject"]
    assert res.json()["message"] == "Accounts found"
    assert data["total"] == 3


def test_accounts_search_by_email(api_client, admin_account, patient_account, provider_account):
    res = api_client(admin_account).get("/api/v1/accounts/", {"search": "provider@"})
    data = res.json()["responseObject"]
    assert data["total"] == 1
    assert data["data"][0]["email"] == "provider@example.com"


def test_account_retrieve_and_404(api_client, admin_account, patient_account):
    client = api_client(admin_account)
    ok = client.get(f"/api/v1/accounts/{patient_account.id}/")
    assert ok.status_code == 200
    assert ok.json()["responseObject"]["role"] == "Patient"

    missing = client.get("/api/v1/accounts/00000000-0000-0000-0000-000000000000/")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Account not found"


def test_me(api_client, provider_account):
    res = api_client(provider_account).get("/api/v1/me/")
    assert res.status_code == 200
    assert res.json()["responseObject"]["email"] == "provider@example.com"


def test_superuser_without_account_gets_one_on_first_write(api_client, provider, patient):
    user = get_user_model().objects.create_superuser(
        username="root@example.com", email="root@example.com", password="Pass@12345"
    )
    client = api_client()
    client.force_authenticate(user=user)

    res = client.post(
        "/api/v1/medications/",
        {
            "name": "Paracetamol",
            "dosage": "1g",
            "frequency": "2x daily",
            "duration": "3 days",
            "provider_id": str(provider.id),
            "patient_id": str(patient.id),
        },
        format="json",
    )
    assert res.status_code == 201, res.json()

    account = Account.objects.get(user=user)
    assert account.role == Role.SUPER_ADMIN
    assert account.is_email_verified is True
