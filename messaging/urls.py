from django.urls import path

from .views import chat_student, chat_teacher, course_history

app_name = "messaging"

urlpatterns = [
    path("chat/teacher", chat_teacher, name="chat-teacher"),
    path("chat/student", chat_student, name="chat-student"),
    path("chat/course/<int:course_id>/history", course_history, name="course-history"),
]
