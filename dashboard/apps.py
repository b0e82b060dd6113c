from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Landing page, role dashboards and the live quick-start stats."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "dashboard"

    def ready(self):
        from . import signals  # noqa: F401
