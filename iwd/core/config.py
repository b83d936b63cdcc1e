"""
Configuration helpers for the tribute backend.

Routers, services and the collection store never read os.environ directly:
everything goes through the Settings object returned by get_settings().
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

MODE_SERVER = "server"
MODE_SERVERLESS = "serverless"


@dataclass(frozen=True)
class StoreConfig:
    """Where the collection files live and which deployment shape owns them."""

    base_dir: Path
    mode: str = MODE_SERVER

    @property
    def serverless(self) -> bool:
        return self.mode == MODE_SERVERLESS


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    mode: str
    data_dir: Path
    static_dir: Path
    host: str
    port: int
    log_level: str

    @property
    def serverless(self) -> bool:
        return self.mode == MODE_SERVERLESS

    def store_config(self) -> StoreConfig:
        return StoreConfig(base_dir=self.data_dir, mode=self.mode)


def _int(value: str | None, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    serverless = _bool(os.getenv("VERCEL")) or _bool(os.getenv("SERVERLESS"))
    mode = MODE_SERVERLESS if serverless else MODE_SERVER

    # Serverless functions only get a writable /tmp.
    default_data = Path("/tmp") / "data" if serverless else Path.cwd() / "data"
    data_dir = Path(os.getenv("DATA_DIR") or default_data)
    static_dir = Path(os.getenv("STATIC_DIR") or Path.cwd() / "public")

    log_level = (os.getenv("LOG_LEVEL") or "").strip().upper()
    if not log_level:
        log_level = "DEBUG" if _bool(os.getenv("DEBUG")) else "INFO"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        mode=mode,
        data_dir=data_dir,
        static_dir=static_dir,
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        log_level=log_level,
    )
