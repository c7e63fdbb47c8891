"""Shared fixtures: a fresh store on a temporary SQLite file per test."""

from __future__ import annotations

import pytest

from foodjournal.config import AppConfig, DatabaseConfig
from foodjournal.db.connection import Store
from foodjournal.db.models import UserRepository


def make_config(tmp_path) -> AppConfig:
    config = AppConfig()
    config.database = DatabaseConfig(sqlite_path=tmp_path / "test.db")
    return config


@pytest.fixture
def config(tmp_path) -> AppConfig:
    return make_config(tmp_path)


@pytest.fixture
def store(config):
    """An uninitialized store; the first statement opens it."""
    store = Store(config)
    yield store
    store.close()


@pytest.fixture
def user_id(store) -> int:
    return UserRepository(store).create("eater@example.com", "secret")
