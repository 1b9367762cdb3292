"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, course_backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from course_backend import __version__
from course_backend.boundary.db import dispose_engine
from course_backend.configs import get_settings
from course_backend.observability.logger import configure_logging
from course_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)
from .routers import (
    course_enrollments_router,
    courses_router,
    health_router,
    invites_router,
    my_courses_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info("Course service starting", extra={"version": __version__})

    yield

    # Shutdown
    await dispose_engine()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Course Versioning API",
        description="Course authoring, versioned publishing and patient enrollment",
        version=__version__,
        debug=get_settings().debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware; the last added runs first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(invites_router, prefix="/api/v1")
    app.include_router(courses_router, prefix="/api/v1")
    app.include_router(course_enrollments_router, prefix="/api/v1")
    app.include_router(my_courses_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "course_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
