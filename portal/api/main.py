"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from portal.api.redirects import router as legacy_redirects_router
from portal.utils.feature_flags import legacy_admin_redirects_enabled
from portal.utils.urls import get_app_base_url

SERVICE_NAME = "practice-portal-service"


def _allowed_origins() -> list[str]:
    origins = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5000",
    ]
    app_base = get_app_base_url()
    if app_base and app_base not in origins:
        origins.append(app_base)
    return origins


def create_app() -> FastAPI:
    app = FastAPI(
        title="Practice Portal Service",
        description="Legacy admin redirects for the practice portal.",
        version="1.0.0",
    )

    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if legacy_admin_redirects_enabled():
        app.include_router(legacy_redirects_router)
        logger.info("Legacy admin redirects enabled")
    else:
        logger.info("Legacy admin redirects disabled via LEGACY_ADMIN_REDIRECTS_ENABLED")

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": SERVICE_NAME}

    return app


app = create_app()
