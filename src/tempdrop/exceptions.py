"""Error taxonomy shared by the store, the scheduler and the HTTP layer."""

from __future__ import annotations

from fastapi import status

__all__ = [
    "AppError",
    "ClientError",
    "InvalidBodyError",
    "InvalidIdentifierError",
    "DurationParseError",
    "PayloadTooLargeError",
    "NotFoundError",
    "StoreError",
    "WriteFailure",
    "ReadFailure",
]


class AppError(Exception):
    """Base class for application specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason: str = "Internal error"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason is not None:
            self.reason = reason


class ClientError(AppError):
    """Raised when the request itself is unusable."""

    status_code = status.HTTP_400_BAD_REQUEST
    reason = "Bad request"


class InvalidBodyError(ClientError):
    """Raised when an upload carries no bytes."""

    reason = "Invalid body"


class InvalidIdentifierError(ClientError):
    """Raised when a name cannot address a stored object."""

    reason = "Invalid id"


class DurationParseError(ClientError):
    """Raised when an expiry expression is not understood."""

    reason = "Invalid expire"


class PayloadTooLargeError(ClientError):
    """Raised when an upload exceeds the configured ceiling."""

    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    reason = "Payload too large"


class NotFoundError(AppError):
    """Raised when no file exists for a name (absent or already expired)."""

    status_code = status.HTTP_404_NOT_FOUND
    reason = "File not found"


class StoreError(AppError):
    """Base class for storage I/O failures."""


class WriteFailure(StoreError):
    """Raised when persisting an upload fails."""

    reason = "Failed to save uploaded file"


class ReadFailure(StoreError):
    """Raised when reading an existing file fails."""

    reason = "Failed to read file"
