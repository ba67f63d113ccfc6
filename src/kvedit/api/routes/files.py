"""Text file endpoints: get, upsert, delete."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from kvedit.api.routes.deps import get_file_service
from kvedit.exceptions import InvalidBodyError
from kvedit.services.file_service import FileService

router = APIRouter(tags=["files"])


@router.get("/files/{key:path}", response_class=PlainTextResponse)
async def get_file(key: str, service: FileService = Depends(get_file_service)) -> PlainTextResponse:
    body = await run_in_threadpool(service.read, key)
    return PlainTextResponse(body)


@router.put("/files/{key:path}", status_code=201, response_class=PlainTextResponse)
@router.post("/files/{key:path}", status_code=201, response_class=PlainTextResponse)
async def upsert_file(
    key: str,
    request: Request,
    service: FileService = Depends(get_file_service),
) -> PlainTextResponse:
    """Store the raw request body as UTF-8 text.

    POST is accepted as well as PUT; browser clients send POST.
    """
    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidBodyError(f"Invalid body for {key}: must be UTF-8 text") from e
    await run_in_threadpool(service.write, key, body)
    return PlainTextResponse("Saved", status_code=201)


@router.delete("/files/{key:path}", response_class=PlainTextResponse)
async def delete_file(key: str, service: FileService = Depends(get_file_service)) -> PlainTextResponse:
    await run_in_threadpool(service.remove, key)
    return PlainTextResponse("Deleted")
