from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
MAX_PORT = 65535


def _default_images_path() -> Path:
    """Locate the images directory that sits next to the gateway package."""

    candidates = [PROJECT_ROOT / "images", Path.cwd() / "images"]
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    return candidates[0]


class Settings(BaseSettings):
    """Gateway configuration loaded from environment variables or .env file.

    Every setting has a documented default. Blank or unparsable values fall
    back to that default with a warning instead of failing startup.
    """

    # Origin
    origin_url_base: str = Field(
        "http://localhost:8080/",
        validation_alias=AliasChoices("ORIGIN_URL_BASE", "ORIGIN_URL", "origin_url_base"),
        description="Base URL the size token and '.jpg' are appended to.",
    )
    upstream_timeout: float = Field(30.0, description="Upstream fetch timeout in seconds.")
    max_upstream_bytes: int = Field(10 * 1024 * 1024, description="Largest upstream body buffered.")

    # Local images
    images_path: Path = Field(None, validate_default=True, description="Directory holding <size>.jpg files.")

    # Server
    server_host: str = Field("0.0.0.0")
    server_start_port: int = Field(3001)
    server_worker_threads: int = Field(0, description="0 means the server's default concurrency.")

    log_level: str = Field("INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("origin_url_base", "server_host", "log_level", mode="before")
    @classmethod
    def _blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value.strip() if isinstance(value, str) else value

    @field_validator("server_start_port", "server_worker_threads", "max_upstream_bytes", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any, info: ValidationInfo) -> int:
        default = cls.model_fields[info.field_name].default
        try:
            parsed = int(str(value).strip())
        except (TypeError, ValueError):
            logger.warning("Invalid integer value for %s: %r; using %s", info.field_name, value, default)
            return default
        out_of_range = parsed < 0 or (parsed == 0 and info.field_name != "server_worker_threads")
        if info.field_name == "server_start_port" and parsed > MAX_PORT:
            out_of_range = True
        if out_of_range:
            logger.warning("Out of range value for %s: %r; using %s", info.field_name, value, default)
            return default
        return parsed

    @field_validator("upstream_timeout", mode="before")
    @classmethod
    def _lenient_timeout(cls, value: Any, info: ValidationInfo) -> float:
        default = cls.model_fields[info.field_name].default
        try:
            parsed = float(str(value).strip())
        except (TypeError, ValueError):
            logger.warning("Invalid number for %s: %r; using %s", info.field_name, value, default)
            return default
        if parsed <= 0:
            logger.warning("Non-positive timeout %r; using %s", value, default)
            return default
        return parsed

    @field_validator("images_path", mode="before")
    @classmethod
    def _resolve_images_path(cls, value: Any) -> Path:
        if value is None or (isinstance(value, str) and not value.strip()):
            return _default_images_path()
        return Path(value).expanduser()

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Unknown log level %r; using INFO", value)
            return "INFO"
        return level


def load() -> Settings:
    """Build the settings and log which effective values were chosen."""

    settings = Settings()
    if not settings.origin_url_base.endswith("/"):
        logger.warning(
            "ORIGIN_URL_BASE %r does not end with '/'; size tokens are appended verbatim",
            settings.origin_url_base,
        )
    if not settings.images_path.is_dir():
        logger.warning("Images directory %s does not exist", settings.images_path)
    logger.info(
        "Configuration loaded: ImagesPath=%s, OriginURL=%s, Port=%d, Workers=%d, Timeout=%.1fs",
        settings.images_path,
        settings.origin_url_base,
        settings.server_start_port,
        settings.server_worker_threads,
        settings.upstream_timeout,
    )
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance so it is only parsed once."""

    return load()
