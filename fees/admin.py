from django.contrib import admin

from .models import Fee


@admin.register(Fee)
class FeeAdmin(admin.ModelAdmin):
    list_display = ("student", "fee_type", "amount", "due_date", "status", "paid_at")
    list_filter = ("status",)
    search_fields = ("student__username", "fee_type")
