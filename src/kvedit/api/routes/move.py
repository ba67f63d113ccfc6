"""Rename endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from kvedit.api.routes.deps import get_file_service
from kvedit.services.file_service import FileService

router = APIRouter(tags=["move"])


class MoveRequest(BaseModel):
    """Source and destination keys, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    src_key: str = Field(alias="srcKey", min_length=1)
    dst_key: str = Field(alias="dstKey", min_length=1)


@router.post("/mv", response_class=PlainTextResponse)
async def move_file(
    request: MoveRequest,
    service: FileService = Depends(get_file_service),
) -> PlainTextResponse:
    """Copy the source body to the destination, then delete the source.

    409 if the destination exists, 404 if the source does not.
    """
    await run_in_threadpool(service.move, request.src_key, request.dst_key)
    return PlainTextResponse("Moved")
