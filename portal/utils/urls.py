"""
URL utilities for locating the portal frontend and its REST API.

Primary source: APP_BASE_URL (e.g., https://portal.example.com)
Fallback: APP_HOST for compatibility (adds scheme heuristically if missing).
The API base is PORTAL_API_URL, or the app base with ``/api`` appended.
"""
from __future__ import annotations

import os

DEFAULT_APP_BASE_URL = "http://localhost:3000"
DEFAULT_API_BASE_URL = "http://localhost:5000/api"


def _add_scheme_if_missing(host: str) -> str:
    h = host.strip()
    if not h:
        return DEFAULT_APP_BASE_URL
    if h.startswith("http://") or h.startswith("https://"):
        return h
    # Simple heuristic: use http for localhost, otherwise https
    lower = h.lower()
    if lower.startswith("localhost") or lower.startswith("127.0.0.1"):
        return f"http://{h}"
    return f"https://{h}"


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def get_app_base_url() -> str | None:
    """Return the normalized frontend base URL, or None when unset.

    Precedence:
    1. APP_BASE_URL (recommended)
    2. APP_HOST (legacy), scheme added if missing
    """
    base = os.getenv("APP_BASE_URL")
    if base and base.strip():
        return _strip_trailing_slash(base.strip())
    host = os.getenv("APP_HOST")
    if host and host.strip():
        return _strip_trailing_slash(_add_scheme_if_missing(host.strip()))
    return None


def get_api_base_url() -> str:
    """Return the base URL of the portal REST API.

    Precedence:
    1. PORTAL_API_URL
    2. App base URL + ``/api``
    Defaults to http://localhost:5000/api.
    """
    explicit = os.getenv("PORTAL_API_URL")
    if explicit and explicit.strip():
        return _strip_trailing_slash(_add_scheme_if_missing(explicit.strip()))
    app_base = get_app_base_url()
    if app_base:
        return f"{app_base}/api"
    return DEFAULT_API_BASE_URL
