from django.contrib import admin

from .models import ODRequest


@admin.register(ODRequest)
class ODRequestAdmin(admin.ModelAdmin):
    list_display = ("student", "request_date", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("student__username", "reason")
