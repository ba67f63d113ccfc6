"""Key listing endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from kvedit.api.routes.deps import get_file_service
from kvedit.services.file_service import FileService

router = APIRouter(tags=["lists"])


@router.get("/lists")
@router.get("/lists/{prefix:path}")
async def list_keys(prefix: str = "", service: FileService = Depends(get_file_service)) -> list[str]:
    """Every key, or only those starting with *prefix*."""
    return await run_in_threadpool(service.list_keys, prefix)
