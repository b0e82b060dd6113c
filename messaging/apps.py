from django.apps import AppConfig


class MessagingConfig(AppConfig):
    """Course chat over Channels."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "messaging"

    def ready(self):
        from . import signals  # noqa: F401
