"""Process configuration read once at startup.

Every setting can be overridden through ``TEMPDROP_*`` environment variables,
e.g. ``TEMPDROP_STORAGE_ROOT=/var/tmp/drop``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import DurationParseError
from .storage.durations import parse_duration


class AppConfig(BaseSettings):
    """Settings injected into the store and the HTTP layer."""

    model_config = SettingsConfigDict(env_prefix="TEMPDROP_")

    storage_root: Path = Field(
        default=Path("./data"),
        description="Directory holding every stored object; wiped at startup.",
    )
    upload_limit_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Largest accepted upload body in bytes.",
    )
    default_expire: str = Field(
        default="1m",
        description="Expiry expression applied when an upload omits ``expire``.",
    )
    max_expire: str | None = Field(
        default=None,
        description="Optional ceiling for requested expiry expressions.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to.")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP port.")

    @field_validator("default_expire", "max_expire")
    @classmethod
    def _validate_expression(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                parse_duration(value)
            except DurationParseError as exc:
                raise ValueError(str(exc)) from exc
        return value

    @field_validator("storage_root")
    @classmethod
    def _resolve_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @property
    def default_expire_ms(self) -> int:
        return parse_duration(self.default_expire)

    @property
    def max_expire_ms(self) -> int | None:
        if self.max_expire is None:
            return None
        return parse_duration(self.max_expire)


def load_config(**overrides: object) -> AppConfig:
    """Load configuration from the environment; keyword overrides win."""
    return AppConfig(**overrides)


__all__ = ["AppConfig", "load_config"]
