"""Uniform ``{"success": false, "reason": ...}`` error envelope."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ..exceptions import AppError, StoreError

logger = logging.getLogger(__name__)


def error_response(reason: str, status_code: int) -> JSONResponse:
    """Materialise the error envelope into a ``JSONResponse``."""

    return JSONResponse(status_code=status_code, content={"success": False, "reason": reason})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert :class:`AppError` exceptions into the error envelope."""

    reason = str(exc)
    if isinstance(exc, StoreError):
        logger.error(
            "%s %s - %s",
            request.method,
            request.url.path,
            reason,
            exc_info=exc,
        )
    else:
        logger.warning("%s %s - %s", request.method, request.url.path, reason)
    return error_response(reason, exc.status_code)


__all__ = ["app_error_handler", "error_response"]
