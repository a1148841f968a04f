from __future__ import annotations

from pathlib import Path

import pytest

from tempdrop.config import AppConfig
from tempdrop.storage.object_store import ObjectStore


@pytest.fixture()
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture()
def store(storage_root: Path) -> ObjectStore:
    return ObjectStore(storage_root)


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(storage_root=tmp_path / "drop-root")


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
