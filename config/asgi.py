"""ASGI config for the marketplace project.

This module exposes the ASGI application used for serving real‑time
chat over WebSocket alongside the traditional HTTP interface. HTTP
requests go to Django, WebSocket connections are authenticated with a JWT
passed in the query string and routed to the chat consumer.
"""

import os

from django.core.asgi import get_asgi_application  # type: ignore

# Use the development settings by default. Production servers should set
# DJANGO_SETTINGS_MODULE accordingly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

# Django must be set up before importing consumers and models.
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402

from apps.chat.middleware import JWTQueryStringAuthMiddleware  # noqa: E402
from apps.chat.routing import websocket_urlpatterns  # noqa: E402

application = ProtocolTypeRouter(
    {
        'http': django_asgi_app,
        'websocket': AllowedHostsOriginValidator(
            JWTQueryStringAuthMiddleware(URLRouter(websocket_urlpatterns))
        ),
    }
)
