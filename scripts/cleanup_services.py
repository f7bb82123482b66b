"""Maintenance script that deletes every row of the ``service`` table.

Usage:
  python scripts/cleanup_services.py
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from portal.db import database, models
from portal.db.maintenance import configure_script_logging, run_maintenance


logger = logging.getLogger("portal.scripts.cleanup_services")


# Access the session factory dynamically so tests can swap it out.
SessionLocal = lambda: database.open_session()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete all services")
    return parser.parse_args(argv)


def cleanup_services(session: Session) -> int:
    deleted = session.query(models.Service).delete(synchronize_session=False)
    session.commit()
    logger.info("Deleted services", extra={"deleted_rows": deleted})
    return deleted


def main(argv: list[str] | None = None) -> int:
    configure_script_logging()
    parse_args(argv)
    deleted = run_maintenance(cleanup_services, label="cleanup_services", session_factory=SessionLocal)
    print(f"Deleted services: {deleted}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
