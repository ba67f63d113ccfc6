"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI

from kvedit.api.auth import ICredentialVerifier, require_auth
from kvedit.api.middleware.error_handler import register_error_handlers
from kvedit.api.routes import files, health, lists, move, token
from kvedit.core.config import AppSettings
from kvedit.core.startup_checks import validate_settings
from kvedit.hooks import setup_logging
from kvedit.services.file_service import FileService
from kvedit.store import IObjectStore, create_store


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("kvedit")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: AppSettings | None = None,
    *,
    store: IObjectStore | None = None,
    verifier: ICredentialVerifier | None = None,
) -> FastAPI:
    """Build the application.

    Settings are read from the environment at startup when not given.
    Passing *store* or *verifier* replaces the configured backend or the
    static-token check.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app_settings = settings or AppSettings()
        validate_settings(app_settings)
        setup_logging(app_settings.observability)

        app.state.settings = app_settings
        app.state.file_service = FileService(store or create_store(app_settings.store))
        app.state.verifier = verifier
        yield

    api_config = settings.api if settings else AppSettings().api
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(token.router)
    app.include_router(lists.router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(files.router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(move.router, prefix="/api", dependencies=[Depends(require_auth)])
    return app


app = create_app()
