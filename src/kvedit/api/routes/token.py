"""Cookie bootstrap endpoint (unauthenticated)."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from kvedit.api.auth import TOKEN_COOKIE

router = APIRouter(tags=["auth"])


@router.get("/set-token/{token}", response_class=PlainTextResponse)
async def set_token(token: str, request: Request) -> PlainTextResponse:
    """Store *token* in an HTTP-only, strict same-site cookie.

    The token travels in the URL path, so it can end up in access logs
    and browser history.
    """
    response = PlainTextResponse("Token set")
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        secure=request.app.state.settings.auth.cookie_secure,
        samesite="strict",
    )
    return response
