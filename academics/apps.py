from django.apps import AppConfig


class AcademicsConfig(AppConfig):
    """App configuration for departments and courses."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "academics"
