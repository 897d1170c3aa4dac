"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. See
eduhub.core.lifespan and eduhub.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from eduhub.api.v1 import api_router
from eduhub.core.config import get_settings
from eduhub.core.exception_handlers import register_exception_handlers
from eduhub.core.lifespan import create_lifespan
from eduhub.core.limiter import limiter
from eduhub.middleware import (
    ApiAuditLogMiddleware,
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: size limit -> request ID -> audit log -> CORS -> routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ApiAuditLogMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_body_bytes)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
