# cr_core/encounters/admin.py
from django.contrib import admin

from cr_core.encounters.models import Encounter


@admin.register(Encounter)
class EncounterAdmin(admin.ModelAdmin):
    list_display = ("id", "encounter_type", "status", "scheduled_date", "provider", "patient")
    list_filter = ("status", "encounter_type")
    search_fields = ("clinical_notes", "patient__first_name", "patient__last_name", "provider__name")
    raw_id_fields = ("patient", "provider", "branch", "follow_up_encounter")
    ordering = ("-created_at",)
