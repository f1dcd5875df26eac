from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cr_core.iam"
    label = "iam"

    def ready(self) -> None:
        # registers the OpenAPI auth extension
        from cr_core.iam import openapi  # noqa: F401
