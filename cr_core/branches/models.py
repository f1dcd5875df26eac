# cr_core/branches/models.py
from django.db import models

from cr_core.common.models import UUIDModel
from cr_core.providers.models import Provider


class Branch(UUIDModel):
    """
    Physical location operated by a provider. Encounters may be booked at a branch.
    """
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name="branches")

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True, default="")
    phone_number = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    whatsapp = models.CharField(max_length=32, blank=True, default="")
    hotline = models.CharField(max_length=32, blank=True, default="")

    available = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "branches_branch"
        indexes = [
            models.Index(fields=["provider", "available"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self) -> str:
        return self.name
