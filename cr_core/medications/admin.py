# cr_core/medications/admin.py
from django.contrib import admin

from cr_core.medications.models import Medication


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ("tracking_id", "name", "dosage", "patient", "provider", "created_at")
    search_fields = ("tracking_id", "name")
    raw_id_fields = ("patient", "provider", "encounter")
    readonly_fields = ("tracking_id", "created_at", "updated_at")
