"""One-shot deletion timers for stored objects.

Deadlines live in a heap of ``(fire_at, seq, PendingDeletion)`` drained by a
single background task. Each due entry is removed from the pending table
before its file is unlinked, so a deletion runs at most once; unlinking happens
in a worker thread so one slow removal never holds back the others.

Nothing here is persisted. Pending deletions vanish with the process, which is
why the storage root is wiped at startup (see :mod:`tempdrop.lifecycle`).
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import heapq
import itertools
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .durations import format_duration
from .object_store import ObjectStore

logger = logging.getLogger(__name__)


class DeletionState(str, enum.Enum):
    PENDING = "pending"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class PendingDeletion:
    """Deletion armed for one stored object."""

    name: str
    path: Path
    fire_at: float
    state: DeletionState = DeletionState.PENDING


class ExpirationScheduler:
    """Arm, fire and cancel deletions of stored objects.

    ``schedule`` and ``cancel`` must be called from the event loop that runs
    :meth:`run_forever`.
    """

    def __init__(
        self,
        store: ObjectStore,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or time.monotonic
        self._pending: dict[str, PendingDeletion] = {}
        self._heap: list[tuple[float, int, PendingDeletion]] = []
        self._sequence = itertools.count()
        self._wakeup: asyncio.Event | None = None
        self._shutdown: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None
        self._firing: set[asyncio.Task[bool]] = set()

    def schedule(self, name: str, ttl_ms: int) -> PendingDeletion:
        """Arm deletion of ``name`` after ``ttl_ms``; non-positive fires at once."""

        previous = self._pending.get(name)
        if previous is not None:
            previous.state = DeletionState.CANCELLED

        deletion = PendingDeletion(
            name=name,
            path=self._store.path_for(name),
            fire_at=self._clock() + max(ttl_ms, 0) / 1000,
        )
        self._pending[name] = deletion
        heapq.heappush(self._heap, (deletion.fire_at, next(self._sequence), deletion))
        logger.debug(
            "expiration.scheduled",
            extra={"object_name": name, "ttl": format_duration(ttl_ms)},
        )
        if self._wakeup is not None:
            self._wakeup.set()
        return deletion

    def cancel(self, name: str) -> bool:
        """Disarm the pending deletion of ``name``; ``False`` if none is armed."""

        deletion = self._pending.pop(name, None)
        if deletion is None:
            return False
        deletion.state = DeletionState.CANCELLED
        logger.debug("expiration.cancelled", extra={"object_name": name})
        return True

    def is_pending(self, name: str) -> bool:
        return name in self._pending

    def pending_count(self) -> int:
        return len(self._pending)

    def next_delay(self, now: float | None = None) -> float | None:
        """Seconds until the earliest live deadline, ``None`` when idle."""

        self._discard_stale()
        if not self._heap:
            return None
        current = self._clock() if now is None else now
        return max(self._heap[0][0] - current, 0.0)

    def pop_due(self, now: float | None = None) -> list[PendingDeletion]:
        """Detach every deletion whose deadline has passed and mark it expired."""

        current = self._clock() if now is None else now
        due: list[PendingDeletion] = []
        while self._heap and self._heap[0][0] <= current:
            _, _, deletion = heapq.heappop(self._heap)
            if not self._is_live(deletion):
                continue
            del self._pending[deletion.name]
            deletion.state = DeletionState.EXPIRED
            due.append(deletion)
        return due

    async def expire_due(self, now: float | None = None) -> list[PendingDeletion]:
        """Fire every due deletion and wait for the files to be removed."""

        due = self.pop_due(now)
        await asyncio.gather(*(self._remove(deletion) for deletion in due))
        return due

    async def run_forever(self, shutdown_event: asyncio.Event) -> None:
        """Fire deletions as they come due until ``shutdown_event`` is set."""

        wakeup = self._wakeup = asyncio.Event()
        try:
            while not shutdown_event.is_set():
                wakeup.clear()
                for deletion in self.pop_due():
                    task = asyncio.create_task(
                        self._remove(deletion), name=f"tempdrop-expire-{deletion.name}"
                    )
                    self._firing.add(task)
                    task.add_done_callback(self._firing.discard)
                delay = self.next_delay()
                waiters = [
                    asyncio.ensure_future(wakeup.wait()),
                    asyncio.ensure_future(shutdown_event.wait()),
                ]
                try:
                    await asyncio.wait(waiters, timeout=delay, return_when=asyncio.FIRST_COMPLETED)
                finally:
                    for waiter in waiters:
                        waiter.cancel()
        finally:
            self._wakeup = None

    def start(self) -> None:
        """Spawn the background task on the running loop."""

        if self._task is not None:
            return
        self._shutdown = asyncio.Event()
        self._task = asyncio.create_task(
            self.run_forever(self._shutdown), name="tempdrop-expiration"
        )

    async def stop(self) -> None:
        """Stop firing and forget every pending deletion."""

        if self._shutdown is not None:
            self._shutdown.set()
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if self._firing:
            await asyncio.gather(*self._firing, return_exceptions=True)
        dropped = len(self._pending)
        self._pending.clear()
        self._heap.clear()
        self._shutdown = None
        if dropped:
            logger.info("expiration.stopped", extra={"dropped": dropped})

    async def _remove(self, deletion: PendingDeletion) -> bool:
        try:
            removed = await asyncio.to_thread(self._store.remove, deletion.name)
        except Exception:
            logger.exception("expiration.remove_failed", extra={"object_name": deletion.name})
            return False
        if removed:
            logger.info("expiration.fired", extra={"object_name": deletion.name})
        else:
            logger.debug("expiration.already_removed", extra={"object_name": deletion.name})
        return removed

    def _is_live(self, deletion: PendingDeletion) -> bool:
        return (
            deletion.state is DeletionState.PENDING
            and self._pending.get(deletion.name) is deletion
        )

    def _discard_stale(self) -> None:
        while self._heap and not self._is_live(self._heap[0][2]):
            heapq.heappop(self._heap)


__all__ = ["DeletionState", "ExpirationScheduler", "PendingDeletion"]
