# cr_core/lab_tests/tests/test_lab_tests_api.py
import pytest

from cr_core.lab_tests.models import LabTest, LabTestStatus

pytestmark = pytest.mark.django_db

URL = "/api/v1/tests/"


def test_create_defaults_to_pending(api_client, provider_account, provider, patient):
    res = api_client(provider_account).post(
        URL,
        {
            "name": "Full blood count",
            "urgency": "high",
            "tat": "24h",
            "provider_id": str(provider.id),
            "patient_id": str(patient.id),
        },
        format="json",
    )
    assert res.status_code == 201, res.json()
    body = res.json()
    assert body["message"] == "Test created successfully"
    assert body["responseObject"]["status"] == "Pending"
    assert body["responseObject"]["tracking_id"].startswith("TST")


def test_update_status(api_client, provider_account, provider, patient):
    test = LabTest.objects.create(provider=provider, patient=patient, name="Malaria RDT")
    res = api_client(provider_account).patch(f"{URL}{test.id}/", {"status": "Approved"}, format="json")
    assert res.status_code == 200
    assert res.json()["message"] == "Test updated successfully"
    test.refresh_from_db()
    assert test.status == LabTestStatus.APPROVED


def test_invalid_status_is_400(api_client, provider_account, provider, patient):
    test = LabTest.objects.create(provider=provider, patient=patient, name="Malaria RDT")
    res = api_client(provider_account).patch(f"{URL}{test.id}/", {"status": "Lost"}, format="json")
    assert res.status_code == 400


def test_metrics_per_provider(api_client, admin_account, provider, other_provider, patient):
    LabTest.objects.create(provider=provider, patient=patient, name="a")
    LabTest.objects.create(provider=provider, patient=patient, name="b", status=LabTestStatus.APPROVED)
    LabTest.objects.create(provider=provider, patient=patient, name="c", status=LabTestStatus.REJECTED)
    LabTest.objects.create(provider=other_provider, patient=patient, name="d")

    client = api_client(admin_account)
    res = client.get(f"{URL}metrics/", {"provider_id": str(provider.id)})
    assert res.json()["message"] == "Test metrics fetched"
    assert res.json()["responseObject"] == {"total": 3, "pending": 1, "approved": 1, "rejected": 1}

    assert client.get(f"{URL}metrics/").json()["responseObject"]["pending"] == 2


def test_patient_cannot_see_metrics(api_client, patient_account):
    assert api_client(patient_account).get(f"{URL}metrics/").status_code == 403


def test_missing_returns_404(api_client, patient_account):
    res = api_client(patient_account).get(f"{URL}00000000-0000-0000-0000-000000000000/")
    assert res.status_code == 404
    assert res.json()["message"] == "Test not found"
