from django.urls import path

from .views import fees_admin, fees_records, pay_fee, student_fees

app_name = "fees"

urlpatterns = [
    path("fees/admin", fees_admin, name="admin"),
    path("fees/<int:pk>/pay", pay_fee, name="pay"),
    path("fees/student", student_fees, name="student"),
    path("fees-records", fees_records, name="records"),
]
