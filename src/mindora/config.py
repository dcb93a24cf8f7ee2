# src/mindora/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Storage backend and paths are configurable without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "MINDORA"

STORAGE_BACKENDS = ("json", "sqlite", "memory")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _default_storage_path(data_dir: Path, backend: str) -> Path:
    if backend == "sqlite":
        return data_dir / "storage.sqlite3"
    return data_dir / "storage.json"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data ----
    data_dir: Path
    storage_backend: str
    storage_path: Path
    storage_key: str

    # ---- UI ----
    confirm_delete: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Mindora").strip() or "Mindora"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/mindora"))

        storage_backend = _env(_k("STORAGE_BACKEND"), "json").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"{_k('STORAGE_BACKEND')} must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {storage_backend!r}"
            )
        storage_path = _env_path(
            _k("STORAGE_PATH"), _default_storage_path(data_dir, storage_backend)
        )
        storage_key = _env(_k("STORAGE_KEY"), "mindoraTasks").strip() or "mindoraTasks"

        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            storage_key=storage_key,
            confirm_delete=confirm_delete,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
