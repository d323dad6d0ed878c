"""Centralized snapmatch configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local, .env.test
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "ci"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_SNAPSHOT_DIR = Path("tests") / "resources" / "snapshots"


class Settings(BaseSettings):
    """Typed snapmatch configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `SNAPMATCH_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    snapshot_dir : Path
        Root directory under which snapshot files are laid out; maps from
        `SNAPMATCH_SNAPSHOT_DIR`. Relative paths resolve against the CWD when
        used directly; the pytest plugin anchors them at the pytest rootdir
        instead, so snapshots do not move with the directory pytest runs from.
    extension : str
        File suffix of every snapshot file; maps from `SNAPMATCH_EXTENSION`.
    echo_report : bool
        Print mismatch reports to stdout as well as returning them; maps from
        `SNAPMATCH_ECHO_REPORT`.
    """

    environment: EnvName = Field(default="dev", alias="SNAPMATCH_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    snapshot_dir: Path = Field(default=DEFAULT_SNAPSHOT_DIR, alias="SNAPMATCH_SNAPSHOT_DIR")
    extension: str = Field(default=".json", alias="SNAPMATCH_EXTENSION")
    echo_report: bool = Field(default=True, alias="SNAPMATCH_ECHO_REPORT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.test"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("extension")
    @classmethod
    def _must_start_with_dot(cls, v: str) -> str:
        """Keep `{name}-{seq}{extension}` a well-formed filename."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("extension must look like '.json'")
        return v

    @property
    def is_ci(self) -> bool:
        """Return True if running under CI."""
        return self.environment == "ci"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("SNAPMATCH_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "snapmatch") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
