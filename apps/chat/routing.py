"""WebSocket URL routes."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .consumers import ChatConsumer

websocket_urlpatterns = [
    path("ws/chat/", ChatConsumer.as_asgi()),
]
