# cr_core/lab_tests/admin.py
from django.contrib import admin

from cr_core.lab_tests.models import LabTest


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ("tracking_id", "name", "status", "patient", "provider", "created_at")
    list_filter = ("status",)
    search_fields = ("tracking_id", "name", "facility")
    raw_id_fields = ("patient", "provider", "encounter")
    readonly_fields = ("tracking_id", "created_at", "updated_at")
