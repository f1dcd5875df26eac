# cr_core/referrals/admin.py
from django.contrib import admin

from cr_core.referrals.models import Referral


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = ("tracking_id", "status", "facility", "patient", "provider", "created_at")
    list_filter = ("status",)
    search_fields = ("tracking_id", "reason", "facility")
    raw_id_fields = ("patient", "provider", "encounter")
    readonly_fields = ("tracking_id", "created_at", "updated_at")
