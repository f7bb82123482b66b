"""
SQLAlchemy mappings for the externally owned practice tables.

Only the columns the maintenance tooling reads are mapped; the schema itself
is managed by the main application.
"""

from .base import Base, now_utc  # re-export

from .clients import Client
from .services import Service

__all__ = [
    # base
    "Base",
    "now_utc",
    # practice entities
    "Client",
    "Service",
]
