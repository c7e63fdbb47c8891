"""Application configuration — env vars, YAML files, defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()

ALL_CATEGORIES = "All"


class DatabaseConfig(BaseSettings):
    sqlite_path: Path = REPO_ROOT / "data" / "FoodJournal.db"
    busy_timeout_seconds: float = 5.0

    model_config = {"env_prefix": "FJ_DB_"}


class ServerConfig(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    model_config = {"env_prefix": "FJ_SERVER_"}


class JournalConfig(BaseSettings):
    """Journal entry rules shared by the service and the API."""

    categories: list[str] = Field(
        default_factory=lambda: ["Breakfast", "Lunch", "Dinner", "Snacks"]
    )
    # Stored when an entry is saved while the "All" pseudo-category is selected
    default_category: str = ALL_CATEGORIES

    model_config = {"env_prefix": "FJ_JOURNAL_"}


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    journal: JournalConfig = Field(default_factory=JournalConfig)

    # Environment & Sentry
    environment: str = "development"
    sentry_dsn: str = ""

    # Paths
    config_dir: Path = REPO_ROOT / "config"
    data_dir: Path = REPO_ROOT / "data"

    model_config = {"env_prefix": "FJ_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from YAML file, with env var overrides."""
        if path is None:
            path = REPO_ROOT / "config" / "app.yml"

        values: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        return cls(**values)
