# cr_core/patients/admin.py
from django.contrib import admin

from cr_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "gender", "phone_number", "created_at")
    list_filter = ("gender", "blood_group")
    search_fields = ("first_name", "last_name", "phone_number", "hmo_id")
    ordering = ("-created_at",)
