"""Domain service for uploads, downloads and early deletes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from starlette.concurrency import run_in_threadpool

from ..exceptions import (
    DurationParseError,
    InvalidBodyError,
    InvalidIdentifierError,
    NotFoundError,
    PayloadTooLargeError,
)
from ..storage.durations import MAX_DURATION_MS, format_duration, parse_duration
from ..storage.expiration import ExpirationScheduler
from ..storage.identifiers import generate_identifier
from ..storage.media_types import content_type_for_name, extension_for_content_type
from ..storage.object_store import ObjectStore, StoredObject

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DropService:
    """Coordinates the object store and the expiration scheduler."""

    store: ObjectStore
    scheduler: ExpirationScheduler
    default_expire_ms: int = 60_000
    max_expire_ms: int | None = None
    upload_limit_bytes: int | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    def resolve_ttl(self, expire: str | None) -> int:
        """Parse ``expire`` (or fall back to the default) and apply the ceiling."""
        ttl_ms = self.default_expire_ms if not expire else parse_duration(expire)
        if self.max_expire_ms is not None and ttl_ms > self.max_expire_ms:
            ttl_ms = self.max_expire_ms
        if abs(ttl_ms) > MAX_DURATION_MS:
            raise DurationParseError(f"Invalid expire: {ttl_ms}ms is too long")
        return ttl_ms

    async def upload(
        self,
        body: bytes,
        content_type: str | None,
        expire: str | None = None,
    ) -> StoredObject:
        """Persist ``body`` under a fresh identifier and arm its deletion."""
        if not body:
            raise InvalidBodyError()
        if self.upload_limit_bytes is not None and len(body) > self.upload_limit_bytes:
            raise PayloadTooLargeError()

        ttl_ms = self.resolve_ttl(expire)
        extension = extension_for_content_type(content_type)
        identifier = generate_identifier()

        stored = await run_in_threadpool(
            self.store.put, identifier, extension, body, ttl_ms=ttl_ms
        )
        self.scheduler.schedule(stored.name, ttl_ms)
        self.log.info(
            "Uploaded file with filename %s. Expires after %s",
            stored.name,
            format_duration(ttl_ms),
            extra={"object_name": stored.name, "size_bytes": len(body), "ttl_ms": ttl_ms},
        )
        return stored

    def validate_name(self, name: str | None) -> tuple[str, str]:
        """Return ``(name, mime)`` or raise when ``name`` cannot address a file."""
        if not name:
            raise InvalidIdentifierError()
        mime = content_type_for_name(name)
        if mime is None:
            raise InvalidIdentifierError()
        self.store.path_for(name)
        return name, mime

    async def download(self, name: str | None) -> tuple[bytes, str]:
        name, mime = self.validate_name(name)
        self.log.debug("drop.download.reading", extra={"object_name": name})
        data = await run_in_threadpool(self.store.get, name)
        self.log.info('File "%s" successfully downloaded.', name)
        return data, mime

    async def delete(self, name: str | None) -> None:
        """Remove a file before its deadline and disarm its timer."""
        name, _ = self.validate_name(name)
        self.scheduler.cancel(name)
        removed = await run_in_threadpool(self.store.remove, name)
        if not removed:
            raise NotFoundError()
        self.log.info('File "%s" removed before expiry.', name)


__all__ = ["DropService"]
