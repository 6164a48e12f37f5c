import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_for_token(token):
    auth = JWTAuthentication()
    try:
        validated_token = auth.get_validated_token(token)
        return auth.get_user(validated_token)
    except (InvalidToken, TokenError, AuthenticationFailed) as exc:
        logger.info(f"Rejected websocket token: {exc}")
        return AnonymousUser()


class TokenAuthMiddleware(BaseMiddleware):
    """
    JWT auth for the notifications socket. Expects ``?token=<access jwt>``.
    """
    async def __call__(self, scope, receive, send):
        params = parse_qs(scope.get("query_string", b"").decode())
        token = params.get("token")

        scope["user"] = await get_user_for_token(token[0]) if token else AnonymousUser()
        return await super().__call__(scope, receive, send)
