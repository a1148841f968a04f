"""Filesystem store owning every uploaded blob."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ..exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    ReadFailure,
    StoreError,
    WriteFailure,
)

PARTIAL_SUFFIX = ".part"


@dataclass(frozen=True, slots=True)
class StoredObject:
    """Descriptor of a blob that has been written to the storage root."""

    identifier: str
    extension: str
    path: Path
    created_at: datetime
    ttl_ms: int

    @property
    def name(self) -> str:
        return f"{self.identifier}.{self.extension}"

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(milliseconds=self.ttl_ms)

    @property
    def expires_at_ms(self) -> int:
        """Expiration instant in epoch milliseconds."""
        return round(self.expires_at.timestamp() * 1000)


@dataclass(slots=True)
class ObjectStore:
    """Sole owner of ``root``; one file per object named ``<id>.<ext>``."""

    root: Path
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def path_for(self, name: str) -> Path:
        if (
            not name
            or name.startswith(".")
            or name != Path(name).name
            or "\\" in name
            or "\x00" in name
        ):
            raise InvalidIdentifierError()
        return self.root / name

    def put(self, identifier: str, extension: str, data: bytes, *, ttl_ms: int = 0) -> StoredObject:
        """Write ``data`` to a temp sibling and rename it into place."""
        target = self.path_for(f"{identifier}.{extension}")
        self.log.debug("store.put.started", extra={"path": str(target), "size_bytes": len(data)})
        created_at = datetime.now(timezone.utc)
        partial: str | None = None
        try:
            fd, partial = tempfile.mkstemp(
                dir=self.root, prefix=f".{target.name}.", suffix=PARTIAL_SUFFIX
            )
            with os.fdopen(fd, "wb") as sink:
                sink.write(data)
            os.replace(partial, target)
        except OSError as exc:
            if partial is not None:
                Path(partial).unlink(missing_ok=True)
            raise WriteFailure(f"Failed to save uploaded file: {exc}") from exc

        return StoredObject(
            identifier=identifier,
            extension=extension,
            path=target,
            created_at=created_at,
            ttl_ms=ttl_ms,
        )

    def get(self, name: str) -> bytes:
        path = self.path_for(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError() from exc
        except OSError as exc:
            raise ReadFailure(f"Failed to read file: {exc}") from exc

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def remove(self, name: str) -> bool:
        """Delete the file; ``False`` when it was already gone."""
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StoreError(f"Failed to remove file: {exc}") from exc
        return True

    def purge_all(self) -> None:
        """Drop every stored object and recreate an empty root."""
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise StoreError(f"Failed to clean {self.root}: {exc}") from exc
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Failed to create {self.root}: {exc}") from exc


__all__ = ["ObjectStore", "StoredObject"]
