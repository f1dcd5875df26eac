# cr_core/providers/tests/test_providers_api.py
import pytest

from cr_core.providers.models import Provider

pytestmark = pytest.mark.django_db

URL = "/api/v1/providers/"


def test_me_404_until_profile_exists(api_client, provider_account):
    res = api_client(provider_account).get(f"{URL}me/")
    assert res.status_code == 404
    assert res.json()["message"] == "No provider profile found"


def test_patch_me_upserts_profile(api_client, provider_account):
    client = api_client(provider_account)

    first = client.patch(f"{URL}me/", {"name": "Sunrise Clinic", "type": "clinic"}, format="json")
    assert first.status_code == 200, first.json()
    assert first.json()["message"] == "Provider Updated"

    second = client.patch(f"{URL}me/", {"hotline": "0800"}, format="json")
    assert second.status_code == 200
    assert Provider.objects.filter(account=provider_account).count() == 1

    me = client.get(f"{URL}me/").json()["responseObject"]
    assert me["name"] == "Sunrise Clinic"
    assert me["hotline"] == "0800"


def test_me_is_provider_only(api_client, patient_account, admin_account):
    assert api_client(patient_account).get(f"{URL}me/").status_code == 403
    assert api_client(admin_account).get(f"{URL}me/").status_code == 403


def test_toggle_availability(api_client, provider_account, provider):
    res = api_client(provider_account).post(f"{URL}me/toggle-availability/")
    assert res.status_code == 200
    assert res.json()["responseObject"]["available"] is False

    provider.refresh_from_db()
    assert provider.available is False


def test_delete_me(api_client, provider_account, provider):
    res = api_client(provider_account).delete(f"{URL}me/")
    assert res.status_code == 200
    assert not Provider.objects.filter(pk=provider.pk).exists()


def test_list_and_retrieve(api_client, patient_account, provider, other_provider):
    client = api_client(patient_account)

    listing = client.get(URL, {"search": "other"})
    assert listing.status_code == 200
    data = listing.json()["responseObject"]
    assert data["total"] == 1
    assert data["data"][0]["id"] == str(other_provider.id)

    one = client.get(f"{URL}{provider.id}/")
    assert one.json()["message"] == "Provider found"

    missing = client.get(f"{URL}00000000-0000-0000-0000-000000000000/")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Provider not found"


def test_admin_delete(api_client, admin_account, provider_account, provider):
    assert api_client(provider_account).delete(f"{URL}{provider.id}/").status_code == 403

    res = api_client(admin_account).delete(f"{URL}{provider.id}/")
    assert res.status_code == 200
    assert res.json()["message"] == "Provider deleted successfully"


def test_aggregated_metrics(api_client, admin_account, provider, other_provider):
    other_provider.available = False
    other_provider.phone_number = "0700"
    other_provider.save()

    res = api_client(admin_account).get(f"{URL}metrics/")
    assert res.status_code == 200
    assert res.json()["responseObject"] == {
        "totalProviders": 2,
        "availableProviders": 1,
        "providersWithName": 2,
        "providersWithContact": 1,
        "availablePercent": 50.0,
        "profileCompletePercent": 75.0,
    }


def test_single_provider_metrics(api_client, patient_account, provider):
    res = api_client(patient_account).get(f"{URL}{provider.id}/metrics/")
    assert res.status_code == 200
    data = res.json()["responseObject"]
    assert data["name_present"] is True
    assert data["contact_complete"] is False
    assert data["type_defined"] is True
    # name + type of 7 profile fields
    assert data["profile_complete_percent"] == 29
    assert data["days_active"] == 0
