from __future__ import annotations

import os
import tempfile

# Must be set before shelfkeeper.logging_manager is imported.
os.environ.setdefault("SHELFKEEPER_LOG_DIR", tempfile.mkdtemp(prefix="shelfkeeper-logs-"))

import pytest

from shelfkeeper.config.loader import DATABASE_URL_ENV, get_reader_config
from shelfkeeper.database import create_schema, dispose_engine, get_engine

from tests.helpers.catalog_builders import CatalogBuilder


@pytest.fixture(autouse=True)
def sqlite_database(monkeypatch: pytest.MonkeyPatch):
    """Point the engine at a fresh in-memory SQLite database per test."""

    monkeypatch.setenv(DATABASE_URL_ENV, "sqlite://")
    get_reader_config.cache_clear()
    dispose_engine()
    create_schema()
    yield get_engine()
    dispose_engine()
    get_reader_config.cache_clear()


@pytest.fixture
def catalog() -> CatalogBuilder:
    return CatalogBuilder()
