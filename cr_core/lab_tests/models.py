# cr_core/lab_tests/models.py
from django.db import models

from cr_core.common.models import TrackedModel
from cr_core.encounters.models import Encounter
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider


class LabTestStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    REJECTED = "Rejected", "Rejected"


class LabTest(TrackedModel):
    """
    A diagnostic test ordered by a provider.
    """
    TRACKING_PREFIX = "TST"

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="lab_tests")
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name="lab_tests")
    encounter = models.ForeignKey(
        Encounter, on_delete=models.SET_NULL, null=True, blank=True, related_name="lab_tests"
    )

    name = models.CharField(max_length=255)
    note = models.TextField(blank=True, default="")
    urgency = models.CharField(max_length=32, blank=True, default="")
    # turnaround time, free text ("48h", "3 days")
    tat = models.CharField(max_length=64, blank=True, default="")
    facility = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(
        max_length=16, choices=LabTestStatus.choices, default=LabTestStatus.PENDING, db_index=True
    )

    class Meta:
        db_table = "lab_tests_labtest"
        indexes = [
            models.Index(fields=["provider", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.tracking_id} {self.name} ({self.status})"
