"""
Test configuration and fixtures for the URL shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from mijikaku.app_factory import create_app
from mijikaku.config import Settings
from mijikaku.database.connection import create_db_engine, create_session_factory, init_db
from mijikaku.models.link import Link
from mijikaku.services.short_code import ShortCodeGenerator

TEST_BASE_URL = "https://sho.rt"


class SequenceGenerator(ShortCodeGenerator):
    """Generator that hands out a fixed sequence of ids"""

    def __init__(self, ids):
        super().__init__(length=6)
        self._ids = iter(ids)

    def generate(self) -> str:
        return next(self._ids)


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "database_url": f"sqlite:///{tmp_path / 'test.db'}",
        "base_url": TEST_BASE_URL,
        "environment": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def count_links(session_factory) -> int:
    with session_factory() as session:
        return session.query(Link).count()


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test"""
    return make_settings(tmp_path)


@pytest.fixture(scope="function")
def db_engine(test_settings):
    engine = create_db_engine(test_settings)
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    db = create_session_factory(db_engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(test_settings):
    """
    Create a test client for an app built from the test settings.
    Entering the client runs the lifespan (engine + schema bootstrap).
    """
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
