"""Print every service title and id."""

from __future__ import annotations

import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from portal.db import database, models
from portal.db.maintenance import configure_script_logging, run_maintenance


SessionLocal = lambda: database.open_session()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List all services")
    return parser.parse_args(argv)


def list_services(session: Session) -> list[tuple[str, str]]:
    rows = session.query(models.Service.title, models.Service.id).order_by(models.Service.created_at).all()
    return [(title, service_id) for title, service_id in rows]


def main(argv: list[str] | None = None) -> int:
    configure_script_logging()
    parse_args(argv)
    services = run_maintenance(list_services, label="list_services", session_factory=SessionLocal)
    print(f"Services count: {len(services)}")
    for title, service_id in services:
        print(f"Service: {title} ({service_id})")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
