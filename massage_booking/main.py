"""
FastAPI application for the massage booking backend

Public booking flow plus the admin surface for appointments, availability,
catalog, settings and revenue
"""
import logging
from collections import defaultdict
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from massage_booking.config.settings import get_settings
from massage_booking.core.exceptions import register_exception_handlers
from massage_booking.core.middleware import correlation_id_middleware, request_logging_middleware
from massage_booking.core.monitoring import health_router
from massage_booking.api.v1.router import api_v1_router
from massage_booking.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


def describe_routes(app: FastAPI) -> dict:
    """Registered API routes grouped by their first tag"""
    routes_by_tag = defaultdict(list)
    for route in app.routes:
        if isinstance(route, APIRoute):
            tag = route.tags[0] if route.tags else "other"
            for method in sorted(route.methods):
                routes_by_tag[tag].append((method, route.path))

    return {tag: sorted(routes, key=lambda r: (r[1], r[0])) for tag, routes in routes_by_tag.items()}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    setup_logging()
    logger.info(f"{settings.APP_NAME} starting up (timezone {settings.BUSINESS_TIMEZONE})")

    if settings.DEBUG:
        for tag, routes in sorted(describe_routes(app).items()):
            for method, path in routes:
                logger.debug(f"[{tag}] {method:7} {path}")

    yield

    logger.info(f"{settings.APP_NAME} shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Massage Booking API",
        description="Appointment booking with availability, catalog and revenue tracking",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    # Registered last runs first: correlation id wraps request logging
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "public": "/api/v1/public",
                "admin": "/api/v1/admin",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "massage_booking.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
