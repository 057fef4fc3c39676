"""Application factory for the FastAPI app.

Builds the app in one place (metadata, middleware, handlers, routers) so
tests can create fresh instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import candidates_router, employees_router, health_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations
from app.core.rate_limit import rate_limit_middleware

API_PREFIX = "/api"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so the rest of startup is logged in the final format
    configure_logging(settings.log)

    docs_enabled = settings.app.docs_enabled
    app = FastAPI(
        title="Interview API",
        description=(
            "REST API over in-memory Candidate and Employee collections: CRUD, "
            "validation, pagination, sorting, per-client rate limiting and "
            "consistent JSON errors."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # Middleware: the last one registered runs first, so request ids are
    # assigned before the rate limiter can reject a request
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(candidates_router, prefix=API_PREFIX)
    app.include_router(employees_router, prefix=API_PREFIX)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
