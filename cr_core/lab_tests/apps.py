from django.apps import AppConfig


class LabTestsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cr_core.lab_tests"
    label = "lab_tests"
