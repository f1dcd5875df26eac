# cr_core/encounters/tests/test_encounter_create.py
from datetime import timedelta

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.utils import timezone

from cr_core.encounters.models import Encounter, EncounterStatus

pytestmark = pytest.mark.django_db

URL = "/api/v1/encounters/"


def _payload(provider, patient, **extra):
    data = {
        "provider_id": str(provider.id),
        "patient_id": str(patient.id),
        "encounter_type": "CONSULTATION",
        "scheduled_date": (timezone.now() + timedelta(days=1)).isoformat(),
    }
    data.update(extra)
    return data


def test_create_encounter(api_client, patient_account, provider, patient, branch):
    res = api_client(patient_account).post(
        URL,
        _payload(
            provider,
            patient,
            branch_id=str(branch.id),
            symptoms=["fever", "cough"],
            subjective={"chief_complaint": "Fever for 3 days"},
            objective={"vital_signs": {"temperature": 38.5, "blood_pressure": "120/80"}},
            assessment={"primary_diagnosis": "Malaria"},
            clinical_notes="Patient reports chills",
        ),
        format="json",
    )
    assert res.status_code == 201, res.json()
    body = res.json()
    assert body["message"] == "Encounter created successfully"
    assert body["statusCode"] == 201

    enc = body["responseObject"]
    assert enc["status"] == EncounterStatus.SCHEDULED
    assert enc["branch_id"] == str(branch.id)
    assert enc["symptoms"] == ["fever", "cough"]
    assert enc["objective"]["vital_signs"]["temperature"] == 38.5
    assert enc["assessment"]["secondary_diagnosis"] == []
    assert Encounter.objects.count() == 1


def test_provider_not_found(api_client, patient_account, provider, patient):
    provider_id = provider.id
    provider.delete()
    res = api_client(patient_account).post(
        URL, _payload(provider, patient, provider_id=str(provider_id)), format="json"
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Provider not found"


def test_disabled_provider_is_400(api_client, patient_account, provider, patient):
    provider.available = False
    provider.save()

    res = api_client(patient_account).post(URL, _payload(provider, patient), format="json")
    assert res.status_code == 400
    assert res.json()["message"] == "Provider has been disabled"
    assert Encounter.objects.count() == 0


def test_provider_checked_before_patient(api_client, patient_account, provider, patient):
    provider.available = False
    provider.save()

    res = api_client(patient_account).post(
        URL,
        _payload(provider, patient, patient_id="00000000-0000-0000-0000-000000000000"),
        format="json",
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Provider has been disabled"


def test_patient_not_found(api_client, patient_account, provider, patient):
    res = api_client(patient_account).post(
        URL,
        _payload(provider, patient, patient_id="00000000-0000-0000-0000-000000000000"),
        format="json",
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Patient Profile not found"


def test_branch_not_found_and_disabled(api_client, patient_account, provider, patient, branch):
    client = api_client(patient_account)

    missing = client.post(
        URL,
        _payload(provider, patient, branch_id="00000000-0000-0000-0000-000000000000"),
        format="json",
    )
    assert missing.status_code == 404
    assert missing.json()["message"] == "Branch not found"

    branch.available = False
    branch.save()
    disabled = client.post(URL, _payload(provider, patient, branch_id=str(branch.id)), format="json")
    assert disabled.status_code == 400
    assert disabled.json()["message"] == "Branch has been disabled"


def test_follow_up_checks(api_client, patient_account, provider, patient, encounter):
    client = api_client(patient_account)

    missing = client.post(
        URL,
        _payload(
            provider,
            patient,
            encounter_type="FOLLOW_UP",
            follow_up_encounter_id="00000000-0000-0000-0000-000000000000",
        ),
        format="json",
    )
    assert missing.status_code == 404
    assert missing.json()["message"] == "Follow-up encounter not found"

    wrong_type = client.post(
        URL,
        _payload(provider, patient, follow_up_encounter_id=str(encounter.id)),
        format="json",
    )
    assert wrong_type.status_code == 400
    assert wrong_type.json()["message"] == "Encounter type must be follow up if there's a follow up id"

    ok = client.post(
        URL,
        _payload(provider, patient, encounter_type="FOLLOW_UP", follow_up_encounter_id=str(encounter.id)),
        format="json",
    )
    assert ok.status_code == 201, ok.json()
    assert ok.json()["responseObject"]["follow_up_encounter_id"] == str(encounter.id)


def test_missing_required_fields_is_400(api_client, patient_account):
    res = api_client(patient_account).post(URL, {}, format="json")
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "patient_id" in res.json()["responseObject"]


def test_create_issues_single_insert(api_client, patient_account, provider, patient):
    with CaptureQueriesContext(connection) as ctx:
        res = api_client(patient_account).post(URL, _payload(provider, patient), format="json")
    assert res.status_code == 201

    inserts = [
        q for q in ctx.captured_queries
        if q["sql"].startswith("INSERT") and "encounters_encounter" in q["sql"]
    ]
    assert len(inserts) == 1
