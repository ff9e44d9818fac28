"""Channels middleware authenticating sockets with a JWT in the query string.

Browsers cannot set headers on WebSocket handshakes, so clients connect
to ``ws/chat/?token=<access token>``.
"""

from __future__ import annotations

from urllib.parse import parse_qs

from channels.db import database_sync_to_async  # type: ignore
from channels.middleware import BaseMiddleware  # type: ignore
from django.contrib.auth.models import AnonymousUser  # type: ignore
from rest_framework.exceptions import AuthenticationFailed  # type: ignore
from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError  # type: ignore


@database_sync_to_async
def get_user_for_token(raw_token: str):
    authentication = JWTAuthentication()
    try:
        validated = authentication.get_validated_token(raw_token)
        return authentication.get_user(validated)
    except (InvalidToken, TokenError, AuthenticationFailed):
        return AnonymousUser()


class JWTQueryStringAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):  # type: ignore
        params = parse_qs(scope.get("query_string", b"").decode())
        token = (params.get("token") or [None])[0]
        scope = dict(scope)
        scope["user"] = await get_user_for_token(token) if token else AnonymousUser()
        return await super().__call__(scope, receive, send)
