"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from kvedit.exceptions import (
    ConflictError,
    InvalidBodyError,
    InvalidKeyError,
    KVEditError,
    NotFoundError,
    ServerMisconfiguredError,
    StoreError,
    UnauthorizedError,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=401)

    @app.exception_handler(ServerMisconfiguredError)
    async def handle_misconfigured(request: Request, exc: ServerMisconfiguredError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=500)

    @app.exception_handler(InvalidKeyError)
    async def handle_invalid_key(request: Request, exc: InvalidKeyError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(InvalidBodyError)
    async def handle_invalid_body(request: Request, exc: InvalidBodyError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> PlainTextResponse:
        return PlainTextResponse("Not Found", status_code=404)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=409)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError) -> PlainTextResponse:
        return PlainTextResponse(f"Internal Server Error: {exc}", status_code=500)

    @app.exception_handler(KVEditError)
    async def handle_generic_error(request: Request, exc: KVEditError) -> PlainTextResponse:
        return PlainTextResponse(f"Internal Server Error: {exc}", status_code=500)
