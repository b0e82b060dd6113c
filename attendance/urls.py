from django.urls import path

from .views import all_attendance, mark_attendance, student_attendance

app_name = "attendance"

urlpatterns = [
    path("attendance/mark", mark_attendance, name="mark"),
    path("attendance/student", student_attendance, name="student"),
    path("attendance/all", all_attendance, name="all"),
]
