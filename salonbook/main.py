"""
FastAPI application for the salon booking service

Public booking page API plus the owner dashboard API
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import BookingError, booking_error_handler
from salonbook.core.middleware import correlation_id_middleware, request_logging_middleware
from salonbook.core.monitoring import health_router
from salonbook.api.v1.router import api_v1_router
from salonbook.api.middleware.rate_limit_middleware import RateLimitMiddleware
from salonbook.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    route_count = sum(1 for route in app.routes if isinstance(route, APIRoute))
    logger.info(
        f"{settings.APP_NAME} starting up: {route_count} routes, "
        f"slot grid {settings.SLOT_GRANULARITY_MINUTES} min, "
        f"booking horizon {settings.BOOKING_WINDOW_DAYS} days, "
        f"notifications {'on' if settings.NOTIFICATIONS_ENABLED else 'off'}"
    )

    yield

    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Online booking for salons and other appointment businesses",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_exception_handler(BookingError, booking_error_handler)

    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.PUBLIC_RATE_LIMIT_PER_MINUTE
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    # Last added runs first: the correlation id must be set before the request is logged
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "public": "/api/v1/public/profiles/{slug}",
                "dashboard": "/api/v1/dashboard/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "salonbook.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
