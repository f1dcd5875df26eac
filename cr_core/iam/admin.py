# cr_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from cr_core.iam.models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "role", "is_email_verified", "created_at")
    list_filter = ("role", "is_email_verified")
    search_fields = ("user__email", "user__username")
    readonly_fields = ("otp", "otp_expires_at", "created_at", "updated_at")
    ordering = ("-created_at",)
