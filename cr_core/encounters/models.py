# cr_core/encounters/models.py
from django.db import models

from cr_core.branches.models import Branch
from cr_core.common.models import UUIDModel
from cr_core.patients.models import Patient
from cr_core.providers.models import Provider


class EncounterType(models.TextChoices):
    CONSULTATION = "CONSULTATION", "Consultation"
    FOLLOW_UP = "FOLLOW_UP", "Follow up"


class EncounterStatus(models.TextChoices):
    SCHEDULED = "SCHEDULED", "Scheduled"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


class Encounter(UUIDModel):
    """
    One clinical visit between a patient and a provider.

    SOAP sub-objects (subjective / objective / assessment) are stored as JSON;
    their shape is enforced by the API serializers.
    """
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="encounters")
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name="encounters")
    branch = models.ForeignKey(
        Branch, on_delete=models.SET_NULL, null=True, blank=True, related_name="encounters"
    )

    encounter_type = models.CharField(max_length=16, choices=EncounterType.choices)
    status = models.CharField(
        max_length=16, choices=EncounterStatus.choices, default=EncounterStatus.SCHEDULED, db_index=True
    )

    scheduled_date = models.DateTimeField()
    actual_start_time = models.DateTimeField(null=True, blank=True)
    actual_end_time = models.DateTimeField(null=True, blank=True)

    symptoms = models.JSONField(default=list, blank=True)
    subjective = models.JSONField(null=True, blank=True)
    objective = models.JSONField(null=True, blank=True)
    assessment = models.JSONField(null=True, blank=True)

    clinical_notes = models.TextField(blank=True, default="")
    custom_fields = models.JSONField(null=True, blank=True)

    follow_up_encounter = models.ForeignKey(
        "self", on_delete=models.SET_NULL, null=True, blank=True, related_name="follow_ups"
    )

    cancellation_reason = models.TextField(blank=True, default="")
    reschedule_reason = models.TextField(blank=True, default="")

    class Meta:
        db_table = "encounters_encounter"
        indexes = [
            models.Index(fields=["provider", "status"]),
            models.Index(fields=["patient", "status"]),
            models.Index(fields=["scheduled_date"]),
        ]

    def __str__(self) -> str:
        return f"{self.encounter_type} {self.scheduled_date:%Y-%m-%d} ({self.status})"
