from django.urls import path

from .views import approve_od, decide_od, request_od

app_name = "onduty"

urlpatterns = [
    path("od/request", request_od, name="request"),
    path("od/approve", approve_od, name="approve"),
    path("od/<int:pk>/decide", decide_od, name="decide"),
]
