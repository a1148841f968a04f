"""HTTP routes for uploading and downloading drops."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from .drop_schemas import ErrorResponse, UploadResponse
from .drop_service import DropService

router = APIRouter(tags=["drop"])

USAGE = """\
Usage
    POST /upload?[expire=<duration>]
        Stores the raw request body and returns its id.
        Sample response:
            {"success": true, "id": "<uuid>.txt", "type": "txt",
             "expire": 60000, "expireAt": 1700000000000}

    GET /download?id=<id>
        Returns the stored bytes with a Content-Type inferred from the id.

    DELETE /delete?id=<id>
        Removes the file before it expires.

Durations
    Numbers with an optional unit, e.g. 100ms, 5s, 1m, 1h30m.
    Units: ms, s, m, h, d, w (and their long forms). No unit means ms.
"""

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_drop_service(request: Request) -> DropService:
    """Fetch drop service from application state."""
    try:
        return request.app.state.drop_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("DropService is not configured") from exc


@router.get("/", response_class=PlainTextResponse)
def usage() -> PlainTextResponse:
    return PlainTextResponse(USAGE)


@router.post("/upload", responses={**_ERRORS, 413: {"model": ErrorResponse}})
async def upload(
    request: Request,
    expire: Annotated[str | None, Query(description="Expiry expression, e.g. 5m")] = None,
    service: DropService = Depends(get_drop_service),
) -> UploadResponse:
    """Store the raw body and schedule its deletion."""
    body = await request.body()
    stored = await service.upload(body, request.headers.get("content-type"), expire)
    return UploadResponse(
        id=stored.name,
        type=stored.extension,
        expire=stored.ttl_ms,
        expire_at=stored.expires_at_ms,
    )


@router.get("/download", responses=_ERRORS)
async def download(
    id: Annotated[str | None, Query(description="Stored file id, e.g. <uuid>.txt")] = None,
    service: DropService = Depends(get_drop_service),
) -> Response:
    data, mime = await service.download(id)
    return Response(content=data, media_type=mime)


@router.delete("/delete", responses=_ERRORS)
async def delete(
    id: Annotated[str | None, Query(description="Stored file id")] = None,
    service: DropService = Depends(get_drop_service),
) -> dict[str, bool]:
    await service.delete(id)
    return {"success": True}
