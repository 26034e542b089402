"""FastAPI application entry point.

Wiring only: lifespan, limiter, exception handlers, CORS, routers.
No business logic here. See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter

_OPENAPI_TAGS = [
    {"name": "search", "description": "Global and typed search, suggestions, popular terms"},
    {"name": "health", "description": "Liveness and readiness probes"},
]


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Cross-entity search over MeetMe meetings, posts, comments and users.",
        debug=settings.debug,
        lifespan=create_lifespan,
        openapi_tags=_OPENAPI_TAGS,
    )

    # slowapi reads the limiter from app.state; limits are declared per route.
    app.state.limiter = limiter
    register_exception_handlers(app)

    # Search is read-only: browsers only need GET.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
