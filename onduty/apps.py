from django.apps import AppConfig


class OnDutyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "onduty"
    verbose_name = "On-duty requests"
