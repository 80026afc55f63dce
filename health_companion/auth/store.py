from __future__ import annotations

import uuid

from fastapi import Depends, Request

from health_companion.core.settings import get_settings
from health_companion.domain.exceptions import NotAuthenticatedError

_BEARER_PREFIX = "Bearer "


class TokenStore:
    """Process-local set of issued session tokens; emptied on restart."""

    def __init__(self) -> None:
        self._tokens: set[str] = set()

    def issue(self) -> str:
        token = str(uuid.uuid4())
        self._tokens.add(token)
        return token

    def contains(self, token: str) -> bool:
        return token in self._tokens

    def clear(self) -> None:
        self._tokens.clear()

    def __len__(self) -> int:
        return len(self._tokens)


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def bearer_token(authorization: str | None) -> str | None:
    """Strip the `Bearer ` prefix from an Authorization header value."""
    if not authorization:
        return None
    return authorization.replace(_BEARER_PREFIX, "", 1)


async def require_session(
    request: Request,
    store: TokenStore = Depends(get_token_store),
) -> str | None:
    """
    Router-level guard for feature routes.

    A no-op unless REQUIRE_AUTH is enabled; then the bearer token must have been
    issued by one of the /auth login endpoints since the last restart.
    """

    if not get_settings().require_auth:
        return None

    token = bearer_token(request.headers.get("Authorization"))
    if not token or not store.contains(token):
        raise NotAuthenticatedError()
    return token
