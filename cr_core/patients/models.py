# cr_core/patients/models.py
from django.db import models

from cr_core.common.models import UUIDModel
from cr_core.iam.models import Account


class Patient(UUIDModel):
    """
    Patient profile. One per Patient account; filled in after registration.
    """
    account = models.OneToOneField(Account, on_delete=models.CASCADE, related_name="patient_profile")

    first_name = models.CharField(max_length=128, blank=True, default="")
    last_name = models.CharField(max_length=128, blank=True, default="")
    dob = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=32, blank=True, default="")
    blood_group = models.CharField(max_length=8, blank=True, default="")
    genotype = models.CharField(max_length=8, blank=True, default="")
    address = models.CharField(max_length=500, blank=True, default="")
    image = models.URLField(max_length=500, blank=True, default="")
    phone_number = models.CharField(max_length=32, blank=True, default="")

    # cm / kg
    height = models.FloatField(null=True, blank=True)
    weight = models.FloatField(null=True, blank=True)
    bmi = models.FloatField(null=True, blank=True)

    hmo_id = models.CharField(max_length=64, blank=True, default="", db_index=True)

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["last_name", "first_name"]),
            models.Index(fields=["phone_number"]),
        ]

    def __str__(self) -> str:
        return self.full_name or str(self.id)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
