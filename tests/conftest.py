import os
import pytest
from fastapi.testclient import TestClient

# Store original environment variables to restore after tests
_original_env = {}

_DB_VARS = ['PORTAL_TEST_DB', 'DATABASE_URL', 'POSTGRES_USER', 'POSTGRES_PASSWORD', 'POSTGRES_HOST', 'POSTGRES_PORT', 'POSTGRES_DB']


def _setup_test_env():
    """Force the in-memory SQLite engine regardless of the caller's shell environment."""
    for var in _DB_VARS:
        if var in os.environ:
            _original_env[var] = os.environ.pop(var)


def _restore_env():
    for var, value in _original_env.items():
        os.environ[var] = value
    _original_env.clear()


_setup_test_env()

from portal.db import database, models
from portal.utils.feature_flags import refresh_feature_flag_cache


@pytest.fixture(scope="session", autouse=True)
def _restore_test_env():
    """Restore original environment variables after all tests complete"""
    yield
    _restore_env()


@pytest.fixture(autouse=True)
def _fresh_feature_flags():
    refresh_feature_flag_cache()
    yield
    refresh_feature_flag_cache()


@pytest.fixture
def db_engine():
    engine = database.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    yield engine
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(db_engine):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from portal.api.main import app

    return TestClient(app)
