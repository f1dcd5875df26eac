# cr_core/branches/admin.py
from django.contrib import admin

from cr_core.branches.models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "provider", "email", "available")
    list_filter = ("available",)
    search_fields = ("name", "address", "email")
    raw_id_fields = ("provider",)
