# cr_core/providers/admin.py
from django.contrib import admin

from cr_core.providers.models import Provider


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "type", "phone_number", "available", "created_at")
    list_filter = ("available", "type")
    search_fields = ("name", "address", "phone_number", "account__user__email")
    ordering = ("-created_at",)
