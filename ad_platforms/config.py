"""
Central configuration loaded from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _extensions(raw: str) -> tuple[str, ...]:
    out = []
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if ext:
            out.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(out)


@dataclass(frozen=True)
class APIConfig:
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    prefix: str = os.getenv("API_PREFIX", "/api/adplatform")


@dataclass(frozen=True)
class UploadConfig:
    max_bytes: int = int(os.getenv("UPLOAD_MAX_BYTES", str(10 * 1024 * 1024)))
    allowed_extensions: tuple[str, ...] = _extensions(
        os.getenv("UPLOAD_ALLOWED_EXTENSIONS", ".txt,.csv")
    )


@dataclass(frozen=True)
class Settings:
    api: APIConfig = field(default_factory=APIConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
