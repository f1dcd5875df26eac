# cr_core/medications/models.py
from django.db import models

from cr_core.common.models import TrackedModel
from cr_core.encounters.models import Encounter
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider


class Medication(TrackedModel):
    """
    A prescription issued by a provider, optionally during an encounter.
    """
    TRACKING_PREFIX = "MED"

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="medications")
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name="medications")
    encounter = models.ForeignKey(
        Encounter, on_delete=models.SET_NULL, null=True, blank=True, related_name="medications"
    )

    name = models.CharField(max_length=255)
    dosage = models.CharField(max_length=128)
    frequency = models.CharField(max_length=128)
    duration = models.CharField(max_length=128)
    instructions = models.TextField(blank=True, default="")
    drug_form = models.CharField(max_length=64, blank=True, default="")
    quantity = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        db_table = "medications_medication"
        indexes = [
            models.Index(fields=["provider", "created_at"]),
            models.Index(fields=["patient", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.tracking_id} {self.name}"
