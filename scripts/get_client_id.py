"""Look up the id of the first client registered under an email address.

Usage:
  python scripts/get_client_id.py [--email someone@example.com]

Prints ``Client ID: None`` when no client matches.
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


logger = logging.getLogger("portal.scripts.get_client_id")

DEFAULT_EMAIL = "testpmclient@example.com"

SessionLocal = lambda: database.open_session()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the id of the client with the given email")
    parser.add_argument(
        "--email",
        default=DEFAULT_EMAIL,
        help=f"Email address to match exactly (default: {DEFAULT_EMAIL})",
    )
    return parser.parse_args(argv)


def find_client_id(session: Session, email: str) -> str | None:
    client = (
        session.query(models.Client)
        .filter(models.Client.email == email)
        .first()
    )
    if client is None:
        logger.info("No client found", extra={"email": email})
        return None
    return client.id


def main(argv: list[str] | None = None) -> int:
    configure_script_logging()
    args = parse_args(argv)
    client_id = run_maintenance(
        lambda session: find_client_id(session, args.email),
        label="get_client_id",
        session_factory=SessionLocal,
    )
    print(f"Client ID: {client_id}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
