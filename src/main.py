"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.dependencies.services import get_http_client
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info(
        "app_started",
        environment=settings.app_env,
        allowed_email_domain=settings.allowed_email_domain,
    )
    yield
    # Only close the shared client if something created it
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()
        get_http_client.cache_clear()
    await engine.dispose()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Coyote Connection\n\n"
            "A campus social feed for College of Idaho students.\n\n"
            "### Features\n"
            "- **Accounts**: Sign-up and sign-in restricted to "
            f"`{settings.allowed_email_domain}` addresses\n"
            "- **Profiles**: Name, major, graduation year, bio and avatar\n"
            "- **Feed**: Short text and photo posts from everyone, newest first\n\n"
            "### Authentication\n"
            "All endpoints except `/health` and sign-up/sign-in require the "
            "Supabase access token in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n"
            "A 401 response carries `details.redirect_to` pointing at sign-in.\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH/DELETE: 10 requests/minute"
        ),
        version=API_VERSION,
        debug=settings.debug,
        contact={
            "name": "Coyote Connection",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "auth",
                "description": "Sign-up, sign-in and sign-out",
            },
            {
                "name": "dashboard",
                "description": "Signed-in landing page",
            },
            {
                "name": "profile",
                "description": "Own profile and avatar",
            },
            {
                "name": "posts",
                "description": "Global feed operations",
            },
            {
                "name": "users",
                "description": "Read-only profile pages",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
