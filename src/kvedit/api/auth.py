"""API authentication: one shared secret, sent as a cookie or Authorization header."""

from __future__ import annotations

import hmac
import logging
from typing import Protocol, runtime_checkable

from fastapi import Request, Security
from fastapi.security import APIKeyCookie, APIKeyHeader

from kvedit.exceptions import ServerMisconfiguredError, UnauthorizedError

log = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

_cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE, auto_error=False)
_header_scheme = APIKeyHeader(name="Authorization", auto_error=False)


@runtime_checkable
class ICredentialVerifier(Protocol):
    """Decides whether a presented credential grants access."""

    def verify(self, credential: str) -> bool:
        ...


class StaticTokenVerifier:
    """Accepts exactly one configured token."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ServerMisconfiguredError("Token is required to be set in env")
        self._token = token.encode("utf-8")

    def verify(self, credential: str) -> bool:
        return hmac.compare_digest(credential.encode("utf-8"), self._token)


def _resolve_verifier(request: Request) -> ICredentialVerifier:
    verifier = getattr(request.app.state, "verifier", None)
    if verifier is not None:
        return verifier
    return StaticTokenVerifier(request.app.state.settings.auth.token)


async def require_auth(
    request: Request,
    cookie_token: str | None = Security(_cookie_scheme),
    header_token: str | None = Security(_header_scheme),
) -> None:
    """Reject the request unless its credential verifies.

    The cookie wins when both are present; the header is compared as-is.
    """
    verifier = _resolve_verifier(request)

    if not cookie_token and not header_token:
        raise UnauthorizedError("Token is required")

    credential = cookie_token or header_token or ""
    if not verifier.verify(credential):
        source = "cookie" if cookie_token else "header"
        log.info("Rejected %s credential for %s %s", source, request.method, request.url.path)
        raise UnauthorizedError("Unauthorized")
