"""
Legacy admin path redirects.

The admin area renamed "CA" to "project managers" and "trainees" to "team
members". Old links keep working through temporary redirects that carry the
identifier segment over untouched; nothing is validated or rendered.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import RedirectResponse

logger = logging.getLogger(__name__)

IDENTIFIER_PLACEHOLDER = "{identifier}"

LEGACY_REDIRECT_STATUS = 307


@dataclass(frozen=True)
class LegacyRedirect:
    name: str
    old_path: str
    new_path: str

    @property
    def old_prefix(self) -> str:
        return self.old_path.split(IDENTIFIER_PLACEHOLDER, 1)[0]

    @property
    def route_path(self) -> str:
        # Path convertor so empty and slash-containing identifiers still match
        return self.old_path.replace(IDENTIFIER_PLACEHOLDER, "{identifier:path}")


# Fixed paths first: "/admin/trainees/create" must win over "/admin/trainees/{identifier}"
LEGACY_ADMIN_REDIRECTS: tuple[LegacyRedirect, ...] = (
    LegacyRedirect("legacy_trainee_create", "/admin/trainees/create", "/admin/team-members/new"),
    LegacyRedirect("legacy_trainee_create_slash", "/admin/trainees/create/", "/admin/team-members/new"),
    LegacyRedirect("legacy_ca_detail", "/admin/ca/{identifier}", "/admin/project-managers/{identifier}"),
    LegacyRedirect("legacy_trainee_detail", "/admin/trainees/{identifier}", "/admin/team-members/{identifier}"),
)


def build_redirect_target(redirect: LegacyRedirect, identifier: Optional[str] = None) -> str:
    """Substitute ``identifier`` verbatim into the redirect's new path."""
    if IDENTIFIER_PLACEHOLDER not in redirect.new_path:
        return redirect.new_path
    return redirect.new_path.replace(IDENTIFIER_PLACEHOLDER, identifier or "")


def _raw_request_path(request: Request) -> str:
    raw = request.scope.get("raw_path")
    if raw:
        # Some servers include the query string in raw_path
        return raw.split(b"?", 1)[0].decode("utf-8", "replace")
    return request.url.path


def _identifier_from_request(redirect: LegacyRedirect, request: Request) -> str:
    """Return the identifier segment as it appeared on the wire (still percent-encoded)."""
    raw_path = _raw_request_path(request)
    prefix = redirect.old_prefix
    if raw_path.startswith(prefix):
        return raw_path[len(prefix):]
    return request.path_params.get("identifier", "")


def _make_endpoint(redirect: LegacyRedirect):
    async def legacy_redirect(request: Request) -> RedirectResponse:
        identifier = None
        if IDENTIFIER_PLACEHOLDER in redirect.old_path:
            identifier = _identifier_from_request(redirect, request)
        target = build_redirect_target(redirect, identifier)
        logger.debug("legacy_redirect name=%s from=%s to=%s", redirect.name, request.url.path, target)
        return RedirectResponse(url=target, status_code=LEGACY_REDIRECT_STATUS)

    legacy_redirect.__name__ = redirect.name
    return legacy_redirect


def build_router(redirects: tuple[LegacyRedirect, ...] = LEGACY_ADMIN_REDIRECTS) -> APIRouter:
    router = APIRouter(tags=["legacy-redirects"])
    for redirect in redirects:
        router.add_api_route(
            redirect.route_path,
            _make_endpoint(redirect),
            methods=["GET"],
            name=redirect.name,
            include_in_schema=False,
            response_class=RedirectResponse,
        )
    return router


router = build_router()
