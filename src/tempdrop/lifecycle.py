"""Startup and shutdown of the expiring-object store.

Deletion timers are not persisted, so every start begins from an empty storage
root; otherwise files uploaded before a restart would never expire.
"""

from __future__ import annotations

import structlog

from .storage.expiration import ExpirationScheduler
from .storage.object_store import ObjectStore

logger = structlog.get_logger(__name__)


def prepare_storage(store: ObjectStore) -> None:
    """Wipe and recreate the storage root; any failure aborts startup."""

    logger.info("storage.cleaning", root=str(store.root))
    store.purge_all()


async def start_expiration(store: ObjectStore, scheduler: ExpirationScheduler) -> None:
    prepare_storage(store)
    scheduler.start()
    logger.info("expiration.started")


async def stop_expiration(scheduler: ExpirationScheduler) -> None:
    await scheduler.stop()
    logger.info("expiration.shutdown")


__all__ = ["prepare_storage", "start_expiration", "stop_expiration"]
