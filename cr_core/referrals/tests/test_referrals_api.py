# cr_core/referrals/tests/test_referrals_api.py
import pytest

from cr_core.referrals.models import Referral, ReferralStatus

pytestmark = pytest.mark.django_db

URL = "/api/v1/referrals/"


@pytest.fixture
def referral(provider, patient, encounter):
    return Referral.objects.create(provider=provider, patient=patient, encounter=encounter, reason="Cardiology review")


def test_create(api_client, provider_account, provider, patient):
    res = api_client(provider_account).post(
        URL,
        {
            "reason": "Orthopaedic consult",
            "facility": "General Hospital",
            "provider_id": str(provider.id),
            "patient_id": str(patient.id),
        },
        format="json",
    )
    assert res.status_code == 201, res.json()
    assert res.json()["message"] == "Referral created successfully"
    ref = res.json()["responseObject"]
    assert ref["status"] == "Pending"
    assert ref["tracking_id"].startswith("REF")


def test_happy_path_transitions(api_client, provider_account, referral):
    client = api_client(provider_account)
    for action, expected in (
        ("approve", ReferralStatus.APPROVED),
        ("ongoing", ReferralStatus.ONGOING),
        ("complete", ReferralStatus.COMPLETED),
    ):
        res = client.patch(f"{URL}{referral.id}/{action}/")
        assert res.status_code == 200, res.json()
        referral.refresh_from_db()
        assert referral.status == expected


def test_reject_from_pending(api_client, provider_account, referral):
    res = api_client(provider_account).patch(f"{URL}{referral.id}/reject/")
    assert res.status_code == 200
    assert res.json()["message"] == "Referral rejected"


@pytest.mark.parametrize(
    "start, action",
    [
        (ReferralStatus.PENDING, "complete"),
        (ReferralStatus.PENDING, "ongoing"),
        (ReferralStatus.APPROVED, "approve"),
        (ReferralStatus.REJECTED, "approve"),
        (ReferralStatus.COMPLETED, "reject"),
        (ReferralStatus.ONGOING, "reject"),
    ],
)
def test_illegal_transitions_are_409(api_client, provider_account, referral, start, action):
    referral.status = start
    referral.save()

    res = api_client(provider_account).patch(f"{URL}{referral.id}/{action}/")
    assert res.status_code == 409
    referral.refresh_from_db()
    assert referral.status == start


def test_update_cannot_change_status(api_client, provider_account, referral):
    res = api_client(provider_account).patch(
        f"{URL}{referral.id}/", {"note": "urgent", "status": "Completed"}, format="json"
    )
    assert res.status_code == 200
    referral.refresh_from_db()
    assert referral.note == "urgent"
    assert referral.status == ReferralStatus.PENDING


def test_other_provider_cannot_transition(api_client, other_provider_account, other_provider, referral):
    res = api_client(other_provider_account).patch(f"{URL}{referral.id}/approve/")
    assert res.status_code == 403
    assert res.json()["message"] == "You do not own this referral"


def test_metrics(api_client, provider_account, provider, patient, referral):
    Referral.objects.create(provider=provider, patient=patient, reason="x", status=ReferralStatus.ONGOING)
    res = api_client(provider_account).get(f"{URL}metrics/")
    assert res.json()["message"] == "Referral metrics fetched"
    assert res.json()["responseObject"] == {
        "total": 2,
        "pending": 1,
        "approved": 0,
        "ongoing": 1,
        "rejected": 0,
        "completed": 0,
    }
