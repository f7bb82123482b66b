"""
Session lifecycle for one-off maintenance scripts.

Each script performs exactly one database operation. The runner opens a
session, hands it to the operation, and always closes it afterwards. Errors
are rolled back, reported on stderr and re-raised unchanged.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, TypeVar

from sqlalchemy.orm import Session

from portal.db import database

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_maintenance(
    operation: Callable[[Session], T],
    *,
    label: str,
    session_factory: Callable[[], Session] | None = None,
) -> T:
    """Run ``operation`` inside a freshly opened session.

    ``session_factory`` defaults to :func:`portal.db.database.open_session`.
    ``close()`` is called exactly once whether the operation succeeds or raises.
    """
    factory = session_factory or database.open_session
    session = factory()
    try:
        logger.info("Maintenance run starting", extra={"operation": label})
        result = operation(session)
        logger.info("Maintenance run finished", extra={"operation": label})
        return result
    except Exception as e:
        session.rollback()
        print(f"{label} failed: {e}", file=sys.stderr)
        logger.exception("Maintenance run failed", extra={"operation": label})
        raise
    finally:
        session.close()


def configure_script_logging() -> None:
    """Install a basic handler unless the caller already configured logging."""
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
