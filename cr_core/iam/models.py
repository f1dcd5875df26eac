# cr_core/iam/models.py
from django.conf import settings
from django.db import models

from cr_core.common.models import UUIDModel


class Role(models.TextChoices):
    PATIENT = "Patient", "Patient"
    PROVIDER = "Provider", "Provider"
    ADMIN = "Admin", "Admin"
    SUPER_ADMIN = "SuperAdmin", "Super Admin"


class Account(UUIDModel):
    """
    Application identity anchored to Django's AUTH_USER_MODEL.
    Username == email; role drives every permission decision.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="account")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.PATIENT, db_index=True)

    otp = models.CharField(max_length=6, blank=True, default="", db_index=True)
    otp_expires_at = models.DateTimeField(null=True, blank=True)
    is_email_verified = models.BooleanField(default=False)

    class Meta:
        db_table = "iam_account"
        indexes = [
            models.Index(fields=["role", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def last_login(self):
        return self.user.last_login

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.ADMIN, Role.SUPER_ADMIN)
