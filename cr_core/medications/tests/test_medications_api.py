# cr_core/medications/tests/test_medications_api.py
import re

import pytest
from django.db import connection

from cr_core.common.repository import Repository
from cr_core.encounters.models import Encounter
from cr_core.iam.models import Role
from cr_core.medications.models import Medication
from cr_core.medications.services import MedicationService
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider

pytestmark = pytest.mark.django_db

URL = "/api/v1/medications/"


def _payload(provider, patient, **extra):
    data = {
        "name": "Amoxicillin",
        "dosage": "500mg",
        "frequency": "3x daily",
        "duration": "7 days",
        "provider_id": str(provider.id),
        "patient_id": str(patient.id),
    }
    data.update(extra)
    return data


def test_create_assigns_tracking_id(api_client, provider_account, provider, patient, encounter):
    res = api_client(provider_account).post(
        URL, _payload(provider, patient, encounter_id=str(encounter.id), quantity=21), format="json"
    )
    assert res.status_code == 201, res.json()
    body = res.json()
    assert body["message"] == "Medication created successfully"

    med = body["responseObject"]
    assert re.fullmatch(r"MED[0-9A-Z]+", med["tracking_id"])
    assert med["encounter_id"] == str(encounter.id)
    assert med["quantity"] == 21


@pytest.mark.parametrize(
    "field, message",
    [
        ("patient_id", "Patient not found"),
        ("provider_id", "Provider not found"),
        ("encounter_id", "Encounter not found"),
    ],
)
def test_create_checks_references(api_client, admin_account, provider, patient, field, message):
    res = api_client(admin_account).post(
        URL, _payload(provider, patient, **{field: "00000000-0000-0000-0000-000000000000"}), format="json"
    )
    assert res.status_code == 404
    assert res.json()["message"] == message
    assert Medication.objects.count() == 0


def test_provider_cannot_prescribe_as_someone_else(api_client, provider_account, provider, other_provider, patient):
    res = api_client(provider_account).post(URL, _payload(other_provider, patient), format="json")
    assert res.status_code == 403
    assert res.json()["message"] == "You do not own this medication"


def test_patient_cannot_create_but_can_read(api_client, patient_account, provider, patient):
    client = api_client(patient_account)
    assert client.post(URL, _payload(provider, patient), format="json").status_code == 403

    med = Medication.objects.create(provider=provider, patient=patient, name="Zinc", dosage="1", frequency="1", duration="1")
    listing = client.get(URL).json()
    assert listing["message"] == "Medications found"
    assert listing["responseObject"]["total"] == 1
    assert client.get(f"{URL}{med.id}/").json()["message"] == "Medication found"


def test_update_and_ownership(api_client, provider_account, other_provider_account, other_provider, provider, patient):
    med = Medication.objects.create(provider=provider, patient=patient, name="Zinc", dosage="1", frequency="1", duration="1")

    denied = api_client(other_provider_account).patch(f"{URL}{med.id}/", {"dosage": "2"}, format="json")
    assert denied.status_code == 403

    res = api_client(provider_account).patch(f"{URL}{med.id}/", {"dosage": "2"}, format="json")
    assert res.status_code == 200
    assert res.json()["message"] == "Medication updated successfully"
    med.refresh_from_db()
    assert med.dosage == "2"


def test_search_by_tracking_id(api_client, provider_account, provider, patient):
    med = Medication.objects.create(provider=provider, patient=patient, name="Zinc", dosage="1", frequency="1", duration="1")
    Medication.objects.create(provider=provider, patient=patient, name="Iron", dosage="1", frequency="1", duration="1")

    data = api_client(provider_account).get(URL, {"search": med.tracking_id.lower()}).json()["responseObject"]
    assert data["total"] == 1
    assert data["data"][0]["name"] == "Zinc"


def test_metrics(api_client, make_account, provider_account, provider, other_provider, patient):
    second = Patient.objects.create(account=make_account(Role.PATIENT), first_name="B")
    for p in (patient, patient, second):
        Medication.objects.create(provider=provider, patient=p, name="x", dosage="1", frequency="1", duration="1")
    Medication.objects.create(provider=other_provider, patient=patient, name="y", dosage="1", frequency="1", duration="1")

    client = api_client(provider_account)
    overall = client.get(f"{URL}metrics/").json()
    assert overall["message"] == "Medication metrics fetched"
    assert overall["responseObject"] == {"total": 4, "patients": 2}

    mine = client.get(f"{URL}metrics/", {"provider_id": str(provider.id)}).json()["responseObject"]
    assert mine == {"total": 3, "patients": 2}


def test_delete(api_client, provider_account, provider, patient):
    med = Medication.objects.create(provider=provider, patient=patient, name="Zinc", dosage="1", frequency="1", duration="1")
    res = api_client(provider_account).delete(f"{URL}{med.id}/")
    assert res.status_code == 200
    assert res.json()["message"] == "Medication deleted successfully"
    assert not Medication.objects.exists()


@pytest.mark.django_db(transaction=True)
def test_create_checks_run_outside_a_transaction(provider_account, provider, patient):
    seen = []

    class RecordingRepository(Repository):
        def find_by_id(self, pk):
            seen.append(connection.in_atomic_block)
            return super().find_by_id(pk)

    service = MedicationService(
        records=Repository(Medication),
        providers=RecordingRepository(Provider),
        patients=RecordingRepository(Patient),
        encounters=Repository(Encounter),
    )
    service.create(
        account=provider_account,
        data={
            "name": "Zinc",
            "dosage": "1",
            "frequency": "1",
            "duration": "1",
            "provider_id": provider.id,
            "patient_id": patient.id,
        },
    )
    assert seen == [False, False]
    assert Medication.objects.count() == 1
