"""Shared fixtures for database-backed tests."""

from __future__ import annotations

import pytest

from db import create_db_engine, create_session_factory
from repositories import ensure_schema


@pytest.fixture()
def session_factory():
    engine = create_db_engine("sqlite://")
    ensure_schema(engine)
    try:
        yield create_session_factory(engine)
    finally:
        engine.dispose()
