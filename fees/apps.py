from django.apps import AppConfig


class FeesConfig(AppConfig):
    """Student fee ledger."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "fees"
