from django.apps import AppConfig


class ApiConfig(AppConfig):
    """REST API v1 over the ERP models."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "api"
