"""
App assembly entry point.

Re-exports the FastAPI `app` from `portal.api.main` so ASGI servers can be
pointed at `app:app`.
"""

from portal.api.main import app  # noqa: F401
