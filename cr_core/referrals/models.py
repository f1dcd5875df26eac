# cr_core/referrals/models.py
from django.db import models

from cr_core.common.models import TrackedModel
from cr_core.encounters.models import Encounter
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider


class ReferralStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    ONGOING = "Ongoing", "Ongoing"
    REJECTED = "Rejected", "Rejected"
    COMPLETED = "Completed", "Completed"


class Referral(TrackedModel):
    TRACKING_PREFIX = "REF"

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="referrals")
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name="referrals")
    encounter = models.ForeignKey(
        Encounter, on_delete=models.SET_NULL, null=True, blank=True, related_name="referrals"
    )

    reason = models.TextField()
    note = models.TextField(blank=True, default="")
    urgency = models.CharField(max_length=32, blank=True, default="")
    facility = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(
        max_length=16, choices=ReferralStatus.choices, default=ReferralStatus.PENDING, db_index=True
    )

    class Meta:
        db_table = "referrals_referral"
        indexes = [
            models.Index(fields=["provider", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.tracking_id} ({self.status})"
