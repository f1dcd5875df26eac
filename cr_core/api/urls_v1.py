# cr_core/api/urls_v1.py
# Schema-only urlconf: documents the versioned API once (without the /api/ alias).
from django.urls import include, path

urlpatterns = [
    path("api/v1/", include("cr_core.api.urls")),
]
