"""ASGI entrypoint for the college ERP (HTTP and WebSocket)."""
import os

from django.core.asgi import get_asgi_application
from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter

# Default to development settings for local runs; override in deployment.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

django_asgi_app = get_asgi_application()

# Routing modules import models, so they load after the app registry
from dashboard.routing import websocket_urlpatterns as dashboard_ws  # noqa: E402
from messaging.routing import websocket_urlpatterns as chat_ws  # noqa: E402

application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AuthMiddlewareStack(URLRouter([*chat_ws, *dashboard_ws])),
    }
)
