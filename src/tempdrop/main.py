"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from . import __version__
from .api.errors import app_error_handler
from .config import AppConfig, load_config
from .drop.drop_api import router as drop_router
from .drop.drop_service import DropService
from .exceptions import AppError
from .lifecycle import start_expiration, stop_expiration
from .storage.expiration import ExpirationScheduler
from .storage.object_store import ObjectStore


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance; the storage root is wiped when it starts."""
    cfg = config or load_config()
    store = ObjectStore(cfg.storage_root)
    scheduler = ExpirationScheduler(store)
    drop_service = DropService(
        store=store,
        scheduler=scheduler,
        default_expire_ms=cfg.default_expire_ms,
        max_expire_ms=cfg.max_expire_ms,
        upload_limit_bytes=cfg.upload_limit_bytes,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await start_expiration(store, scheduler)
        try:
            yield
        finally:
            await stop_expiration(scheduler)

    app = FastAPI(title="tempdrop", version=__version__, lifespan=lifespan)
    app.state.config = cfg
    app.state.store = store
    app.state.scheduler = scheduler
    app.state.drop_service = drop_service
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.include_router(drop_router)
    return app

