from django.urls import path

from .views import (
    delete_course,
    delete_department,
    manage_courses,
    manage_departments,
    my_classes,
    student_profiles,
)

app_name = "academics"

urlpatterns = [
    path("manage-departments", manage_departments, name="manage-departments"),
    path("manage-departments/<int:pk>/delete", delete_department, name="delete-department"),
    path("manage-courses", manage_courses, name="manage-courses"),
    path("manage-courses/<int:pk>/delete", delete_course, name="delete-course"),
    path("teacher/classes", my_classes, name="my-classes"),
    path("teacher/student-profiles", student_profiles, name="student-profiles"),
]
