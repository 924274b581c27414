"""Shared fixtures for the Airwatch test suite."""

from __future__ import annotations

import pytest

from shared.config import AirConfig

from airwatch.storage.database import AccessPointStore


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "wifi_data.db"


@pytest.fixture
def store(db_path):
    store = AccessPointStore(db_path)
    store.create_tables()
    yield store
    store.close()


@pytest.fixture
def config():
    return AirConfig()
