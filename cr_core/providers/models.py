# cr_core/providers/models.py
from django.db import models

from cr_core.common.models import UUIDModel
from cr_core.iam.models import Account


class Provider(UUIDModel):
    """
    Care provider profile (clinic, hospital, practitioner). One per Provider account.
    """
    account = models.OneToOneField(Account, on_delete=models.CASCADE, related_name="provider_profile")

    name = models.CharField(max_length=255, blank=True, default="")
    image = models.URLField(max_length=500, blank=True, default="")
    type = models.CharField(max_length=64, blank=True, default="")
    phone_number = models.CharField(max_length=32, blank=True, default="")
    address = models.CharField(max_length=500, blank=True, default="")
    whatsapp = models.CharField(max_length=32, blank=True, default="")
    hotline = models.CharField(max_length=32, blank=True, default="")

    available = models.BooleanField(default=True, db_index=True)

    CONTACT_FIELDS = ("phone_number", "whatsapp", "hotline")
    PROFILE_FIELDS = ("name", "image", "type", "phone_number", "address", "whatsapp", "hotline")

    class Meta:
        db_table = "providers_provider"
        indexes = [
            models.Index(fields=["available", "created_at"]),
        ]

    def __str__(self) -> str:
        return self.name or str(self.id)
