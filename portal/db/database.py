"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with test
fallbacks (SQLite in-memory). The engine is created on first use so that
importing the web app never requires database settings.
"""
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

_SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so also check for the pytest package in ``sys.modules``. ``PYTEST_RUNNING=1``
    forces the test behaviour explicitly.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


def _sqlite_memory_kwargs() -> dict:
    # StaticPool keeps one connection so the schema persists across sessions
    return {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }


def _resolve_database_config() -> tuple[str, dict]:
    """Return the URL and engine kwargs for the current runtime.

    Precedence:
    1. PORTAL_TEST_DB, when set.
    2. In-memory SQLite when running under pytest.
    3. DATABASE_URL or the POSTGRES_* components.
    """
    explicit_test_db = os.getenv("PORTAL_TEST_DB")
    if explicit_test_db:
        kwargs = {"connect_args": {"check_same_thread": False}} if explicit_test_db.startswith("sqlite") else {}
        return explicit_test_db, kwargs
    if _is_pytest_runtime():
        return _SQLITE_MEMORY_URL, _sqlite_memory_kwargs()
    return _get_database_url(), {}


def _create_engine(url: str, kwargs: dict):
    return create_engine(url, **kwargs)


engine = None

# Bound to the engine on first use by get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def get_engine():
    """Return the process-wide engine, creating it on first call."""
    global engine
    if engine is None:
        url, kwargs = _resolve_database_config()
        engine = _create_engine(url, kwargs)
        SessionLocal.configure(bind=engine)
        _ensure_sqlite_schema(engine)
    return engine


def _ensure_sqlite_schema(bound_engine) -> None:
    # The production schema is owned elsewhere; only sqlite test databases
    # get the mapped tables created locally.
    if str(bound_engine.url).startswith("sqlite"):
        from portal.db import models  # local import to avoid circular import at module load
        models.Base.metadata.create_all(bind=bound_engine)


def open_session():
    """Return a new Session bound to the configured engine."""
    get_engine()
    return SessionLocal()


def reset_engine_for_tests() -> None:
    """Dispose the current engine so the next call rebuilds it from the environment."""
    global engine
    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal.configure(bind=None)
