"""Application configuration objects and helpers."""

from __future__ import annotations

import calendar
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

_WEEKDAYS = {name.lower(): index for index, name in enumerate(calendar.day_name)}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    parsed = int(value)
    if parsed < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    return parsed


def _env_weekday(name: str, default: str) -> int:
    """Resolve a weekday name (``sunday``, ``monday``...) to a ``calendar`` constant."""

    value = (os.getenv(name) or default).strip().lower()
    try:
        return _WEEKDAYS[value]
    except KeyError as exc:
        raise ValueError(f"{name} must name a weekday, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Momentum"
    DB_FILENAME = "momentum.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("MOMENTUM_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("MOMENTUM_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("MOMENTUM_DATABASE_URL", self._build_sqlite_url())
        self.DEFAULT_DAILY_TARGET = _env_int("MOMENTUM_DEFAULT_DAILY_TARGET", 3)
        self.TOP_HABITS_LIMIT = _env_int("MOMENTUM_TOP_HABITS", 5)
        self.WEEK_START = _env_weekday("MOMENTUM_WEEK_START", "sunday")
        self.STATS_FETCH_WORKERS = _env_int("MOMENTUM_STATS_WORKERS", 4)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("MOMENTUM_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("MOMENTUM_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if not self.DATABASE_URL.startswith("sqlite"):
            return {}
        # Statistics fetches run on worker threads, each with its own session.
        return {"connect_args": {"check_same_thread": False}}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite and CLI smoke runs."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.STATS_FETCH_WORKERS = 1
