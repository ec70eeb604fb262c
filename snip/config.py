from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_storage_path() -> Path:
    return Path.home() / ".snip" / "snippets.json"


class Settings(BaseSettings):
    """
    Runtime configuration for the snippet store, based on Pydantic Settings.

    - Reads `SNIP_*` environment variables and an optional `.env` file.
    - Performs type conversion and clear validation.
    """

    STORAGE_PATH: Path = Field(
        default_factory=_default_storage_path,
        description="JSON snapshot file holding snippets, categories and tags",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Minimum log level")
    LOG_FORMAT: str = Field(
        default="json", description="Log renderer: json or console"
    )
    AUTOSAVE_INTERVAL_SECONDS: float = Field(
        default=0.0,
        ge=0.0,
        le=86_400.0,
        description="Periodic save interval in seconds (0 disables autosave)",
    )
    JSON_INDENT: Optional[int] = Field(
        default=2, ge=0, le=8, description="Indentation of the snapshot file"
    )

    model_config = SettingsConfigDict(
        env_prefix="SNIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("STORAGE_PATH", mode="after")
    @classmethod
    def _expand_storage_path(cls, v: Path) -> Path:
        return Path(v).expanduser()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        text = str(v or "INFO").strip().upper()
        if text not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return text

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def _normalize_log_format(cls, v):
        text = str(v or "json").strip().lower()
        if text not in {"json", "console"}:
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return text


def load_config() -> Settings:
    """Build a fresh Settings instance from the current environment.

    pydantic's ValidationError is converted to ValueError so callers only need
    to handle one error type.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


@lru_cache
def get_settings() -> Settings:
    return load_config()
