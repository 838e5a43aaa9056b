from __future__ import annotations

"""Configuration helpers and environment-driven settings."""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

API_ROOT = Path(__file__).resolve().parents[2]


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def resolve_path(path_str: str) -> Path:
    """Resolve a relative path against the API root."""
    path = Path(path_str)
    if path.is_absolute():
        return path
    return API_ROOT / path


@dataclass(frozen=True)
class Settings:
    """Typed configuration values used across the backend."""

    host: str
    port: int
    public_base_url: str
    upload_dir: Path
    state_backend: str
    state_file_path: Path
    redis_url: str
    cors_origins: list[str]
    max_request_bytes: int
    log_level: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment with defaults."""
    cors_raw = _get_str("CORS_ORIGINS", "*")
    cors_origins = [o.strip() for o in cors_raw.split(",") if o.strip()]
    if not cors_origins:
        cors_origins = ["*"]
    return Settings(
        host=_get_str("HOST", "0.0.0.0"),
        port=_get_int("PORT", 3000),
        public_base_url=_get_str("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/"),
        upload_dir=resolve_path(_get_str("UPLOAD_DIR", "uploads")),
        state_backend=_get_str("STATE_BACKEND", "memory").strip().lower(),
        state_file_path=resolve_path(_get_str("STATE_FILE_PATH", "data/orgchart_state.json")),
        redis_url=_get_str("REDIS_URL", "redis://localhost:6379/0"),
        cors_origins=cors_origins,
        max_request_bytes=_get_int("MAX_REQUEST_BYTES", 50 * 1024 * 1024),
        log_level=_get_str("LOG_LEVEL", "INFO").upper(),
    )
