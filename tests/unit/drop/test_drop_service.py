"""Upload/download rules enforced by :class:`DropService`."""

from __future__ import annotations

from pathlib import Path

import pytest

from tempdrop.drop.drop_service import DropService
from tempdrop.exceptions import (
    DurationParseError,
    InvalidBodyError,
    InvalidIdentifierError,
    NotFoundError,
    PayloadTooLargeError,
)
from tempdrop.storage.durations import MAX_DURATION_MS
from tempdrop.storage.expiration import ExpirationScheduler
from tempdrop.storage.object_store import ObjectStore

pytestmark = pytest.mark.unit


def build_service(store: ObjectStore, clock, **overrides) -> DropService:
    scheduler = ExpirationScheduler(store, clock=clock)
    return DropService(store=store, scheduler=scheduler, **overrides)


@pytest.mark.asyncio
async def test_upload_persists_and_schedules(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock)

    stored = await service.upload(b"hello", "text/plain", "100ms")

    assert stored.extension == "txt"
    assert stored.name.endswith(".txt")
    assert stored.ttl_ms == 100
    assert (storage_root / stored.name).read_bytes() == b"hello"
    assert service.scheduler.is_pending(stored.name)


@pytest.mark.asyncio
async def test_upload_uses_default_expire(store: ObjectStore, clock) -> None:
    service = build_service(store, clock, default_expire_ms=60_000)

    stored = await service.upload(b"data", None)

    assert stored.ttl_ms == 60_000
    assert stored.extension == "bin"


@pytest.mark.asyncio
async def test_upload_clamps_to_max_expire(store: ObjectStore, clock) -> None:
    service = build_service(store, clock, max_expire_ms=600_000)

    stored = await service.upload(b"data", "text/plain", "2h")

    assert stored.ttl_ms == 600_000


@pytest.mark.asyncio
async def test_empty_body_is_rejected_before_writing(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock)

    with pytest.raises(InvalidBodyError):
        await service.upload(b"", "text/plain", "1m")

    assert list(storage_root.iterdir()) == []
    assert service.scheduler.pending_count() == 0


@pytest.mark.asyncio
async def test_oversized_body_is_rejected(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock, upload_limit_bytes=4)

    with pytest.raises(PayloadTooLargeError):
        await service.upload(b"12345", "text/plain")

    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_invalid_expire_is_reported(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock)

    with pytest.raises(DurationParseError):
        await service.upload(b"data", "text/plain", "whenever")

    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_identical_uploads_get_distinct_names(store: ObjectStore, clock) -> None:
    service = build_service(store, clock)

    first = await service.upload(b"same", "text/plain")
    second = await service.upload(b"same", "text/plain")

    assert first.name != second.name
    assert service.scheduler.pending_count() == 2


@pytest.mark.asyncio
async def test_download_returns_bytes_and_type(store: ObjectStore, clock) -> None:
    service = build_service(store, clock)
    stored = await service.upload(b"\x89PNG", "image/png")

    data, mime = await service.download(stored.name)

    assert data == b"\x89PNG"
    assert mime == "image/png"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name", [None, "", "no-extension", "abc.notatype", "../outside.txt", ".abc.txt", "a\x00.txt"]
)
async def test_download_rejects_unusable_names(store: ObjectStore, clock, name: str | None) -> None:
    service = build_service(store, clock)

    with pytest.raises(InvalidIdentifierError):
        await service.download(name)


@pytest.mark.asyncio
async def test_download_missing_is_not_found(store: ObjectStore, clock) -> None:
    service = build_service(store, clock)

    with pytest.raises(NotFoundError):
        await service.download("7f1f3f0e-0000-4000-8000-000000000000.txt")


@pytest.mark.asyncio
async def test_download_after_expiry_is_not_found(store: ObjectStore, clock) -> None:
    service = build_service(store, clock)
    stored = await service.upload(b"hello", "text/plain", "100ms")

    clock.advance(0.2)
    await service.scheduler.expire_due()

    with pytest.raises(NotFoundError):
        await service.download(stored.name)


@pytest.mark.asyncio
async def test_delete_removes_file_and_disarms_timer(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock)
    stored = await service.upload(b"hello", "text/plain")

    await service.delete(stored.name)

    assert not (storage_root / stored.name).exists()
    assert not service.scheduler.is_pending(stored.name)
    with pytest.raises(NotFoundError):
        await service.delete(stored.name)


@pytest.mark.asyncio
@pytest.mark.parametrize("expire", ["3000000d", "9" * 400])
async def test_unrepresentable_expire_is_rejected_before_writing(
    store: ObjectStore, storage_root: Path, clock, expire: str
) -> None:
    service = build_service(store, clock)

    with pytest.raises(DurationParseError):
        await service.upload(b"data", "text/plain", expire)

    assert list(storage_root.iterdir()) == []
    assert service.scheduler.pending_count() == 0


@pytest.mark.asyncio
async def test_oversized_default_expire_is_rejected(store: ObjectStore, storage_root: Path, clock) -> None:
    service = build_service(store, clock, default_expire_ms=MAX_DURATION_MS + 1)

    with pytest.raises(DurationParseError):
        await service.upload(b"data", "text/plain")

    assert list(storage_root.iterdir()) == []
