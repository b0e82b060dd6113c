from django.urls import path

from .views import all_marks, student_marks, upload_marks

app_name = "marks"

urlpatterns = [
    path("marks/upload", upload_marks, name="upload"),
    path("marks/student", student_marks, name="student"),
    path("marks/all", all_marks, name="all"),
]
