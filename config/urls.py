"""URL routing for the college ERP.

Public landing and dashboards at the root, sign-in under /auth/, role
pages under /profile/ and /erp/, REST API and docs from `api.urls`.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("dashboard.urls")),
    path("", include("accounts.urls")),
    path("erp/", include("academics.urls")),
    path("erp/", include("attendance.urls")),
    path("erp/", include("marks.urls")),
    path("erp/", include("fees.urls")),
    path("erp/", include("onduty.urls")),
    path("erp/", include("messaging.urls")),
    path("", include("api.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
