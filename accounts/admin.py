from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "first_name", "last_name", "department", "year")
    list_filter = ("role", "department", "year")
    search_fields = ("user__username", "user__email", "first_name", "last_name", "roll_number", "employee_id")
