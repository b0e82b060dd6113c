from __future__ import annotations

from django.urls import re_path

from .consumers import DashboardStatsConsumer


websocket_urlpatterns = [
    re_path(r"^ws/dashboard/stats/$", DashboardStatsConsumer.as_asgi()),
]
