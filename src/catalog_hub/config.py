"""Environment-driven settings.

Values are read from the process environment, after loading a local `.env`
file if one exists. Upstream credentials are optional: a source whose
credentials are missing reports itself as not configured and contributes no
entries.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 15.0
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8780
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
DEFAULT_LOG_LEVEL = "INFO"


def _parse_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _env_limit(name: str) -> Optional[int]:
    """Optional positive cap; unset, invalid or non-positive means no cap."""
    value = _env_int(name, None)
    if value is not None and value <= 0:
        logger.warning(f"Ignoring non-positive {name}={value}, no cap applied")
        return None
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for catalogs and the HTTP API."""

    github_token: Optional[str] = None
    kaggle_username: Optional[str] = None
    kaggle_key: Optional[str] = None
    huggingface_token: Optional[str] = None

    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    max_entries: Optional[int] = None

    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    cors_origins: List[str] = field(default_factory=lambda: _parse_origins(DEFAULT_CORS_ORIGINS))
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def kaggle_configured(self) -> bool:
        return bool(self.kaggle_username and self.kaggle_key)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Settings:
        """Build settings from environment variables."""
        if dotenv:
            load_dotenv()
        return cls(
            github_token=_env_str("GITHUB_API_TOKEN"),
            kaggle_username=_env_str("KAGGLE_USERNAME"),
            kaggle_key=_env_str("KAGGLE_KEY"),
            huggingface_token=_env_str("HF_API_TOKEN"),
            fetch_timeout=_env_float("CATALOG_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            max_entries=_env_limit("CATALOG_MAX_ENTRIES"),
            api_host=os.getenv("CATALOG_API_HOST", DEFAULT_API_HOST),
            api_port=_env_int("CATALOG_API_PORT", DEFAULT_API_PORT) or DEFAULT_API_PORT,
            cors_origins=_parse_origins(os.getenv("CATALOG_API_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
            log_level=os.getenv("CATALOG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
