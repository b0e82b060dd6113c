from django.contrib import admin

from .models import Mark


@admin.register(Mark)
class MarkAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "marks", "grade")
    list_filter = ("grade", "course__department")
    search_fields = ("student__username", "course__code")
    readonly_fields = ("grade",)
