from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_PAGE_SIZE = 10
THEMES = {"light", "dark", "system"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    base_url: str
    timeout_seconds: float
    verify_ssl: bool
    retry_max_attempts: int
    retry_backoff_ms: int
    page_size: int = DEFAULT_PAGE_SIZE
    page_siblings: int = 1
    theme: str = "system"
    env_name: str = "dev"

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        """Load config from environment with optional .env override."""
        load_dotenv(env_file)
        config = cls(
            base_url=(os.getenv("TRAVEL_ADMIN_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/"),
            timeout_seconds=_read_float("TRAVEL_ADMIN_TIMEOUT_SECONDS", "30"),
            verify_ssl=parse_bool(os.getenv("TRAVEL_ADMIN_VERIFY_SSL"), default=True),
            retry_max_attempts=_read_int("TRAVEL_ADMIN_RETRY_MAX_ATTEMPTS", "3"),
            retry_backoff_ms=_read_int("TRAVEL_ADMIN_RETRY_BACKOFF_MS", "150"),
            page_size=_read_int("TRAVEL_ADMIN_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)),
            page_siblings=_read_int("TRAVEL_ADMIN_PAGE_SIBLINGS", "1"),
            theme=(os.getenv("TRAVEL_ADMIN_THEME") or "system").strip().lower(),
            env_name=(os.getenv("TRAVEL_ADMIN_ENV") or "dev").strip().lower() or "dev",
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigError("TRAVEL_ADMIN_BASE_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError("TRAVEL_ADMIN_TIMEOUT_SECONDS must be > 0")
        if self.retry_max_attempts < 1:
            raise ConfigError("TRAVEL_ADMIN_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ConfigError("TRAVEL_ADMIN_RETRY_BACKOFF_MS must be >= 0")
        if self.page_size < 1:
            raise ConfigError("TRAVEL_ADMIN_PAGE_SIZE must be >= 1")
        if self.page_siblings < 0:
            raise ConfigError("TRAVEL_ADMIN_PAGE_SIBLINGS must be >= 0")
        if self.theme not in THEMES:
            raise ConfigError(f"TRAVEL_ADMIN_THEME must be one of {sorted(THEMES)}, got {self.theme!r}")


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default

    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc
