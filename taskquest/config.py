from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def _first_existing(name: str) -> Path | None:
    for base in (Path.cwd(), PROJECT_ROOT):
        path = base / name
        if path.exists():
            return path
    return None


def load_env() -> None:
    base_env = _first_existing(".env")
    if base_env is not None:
        load_dotenv(base_env)

    env_name = os.getenv("TASKQUEST_ENV", "development")
    specific_env = _first_existing(f".env.{env_name}")
    if specific_env is not None:
        load_dotenv(specific_env, override=True)


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    scan_interval_ms: int = 1000
    display_interval_ms: int = 1000


def _default_database_url() -> str:
    return f"sqlite:///{(PROJECT_ROOT / 'taskquest.db').as_posix()}"


def _interval_ms(name: str) -> int:
    raw = os.getenv(name, "1000").strip()
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be a positive number of milliseconds.")
    return value


def load_settings() -> Settings:
    load_env()
    return Settings(
        database_url=os.getenv("DATABASE_URL", "").strip() or _default_database_url(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs"),
        scan_interval_ms=_interval_ms("SCAN_INTERVAL_MS"),
        display_interval_ms=_interval_ms("DISPLAY_INTERVAL_MS"),
    )


SETTINGS = load_settings()
