from django.urls import path

from .views import (
    dashboard_admin,
    dashboard_student,
    dashboard_super_admin,
    dashboard_teacher,
    index,
    stats,
)

app_name = "dashboard"

urlpatterns = [
    path("", index, name="index"),
    path("dashboard/super-admin", dashboard_super_admin, name="super-admin"),
    path("dashboard/admin", dashboard_admin, name="admin"),
    path("dashboard/teacher", dashboard_teacher, name="teacher"),
    path("dashboard/student", dashboard_student, name="student"),
    path("dashboard/stats", stats, name="stats"),
]
