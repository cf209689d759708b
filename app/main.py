"""
Main FastAPI application for Finance Tracker

This module initializes the FastAPI application, configures CORS,
builds the long-lived collaborators (database engine, token service),
registers routers and error handlers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.api import admin, auth, reference, transactions
from app.core.config import Settings, get_settings
from app.core.exceptions import (
    AppError,
    app_error_handler,
    database_error_handler,
    request_validation_handler,
)
from app.core.security import TokenService
from app.db.init_db import init_db
from app.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Setup logging"""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("=" * 50)
    logger.info(f"Starting {settings.project_name}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API prefix: {settings.api_prefix or '/'}")
    logger.info(f"Token lifetime: {settings.token_lifetime}s ({settings.jwt_algorithm})")
    logger.info(f"CORS origins: {settings.allowed_origins}")
    logger.info("=" * 50)

    if settings.auto_create_schema:
        init_db(app.state.engine, app.state.session_factory)

    yield

    # Shutdown
    logger.info("Shutting down Finance Tracker...")
    app.state.engine.dispose()


def create_application(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None
) -> FastAPI:
    """
    Application factory for creating FastAPI instance

    Everything a request needs beyond its own inputs is resolved here,
    once: settings, database engine and session factory, token service.
    A missing JWT secret fails settings validation before the app exists.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="Personal finance tracking system with JWT authentication",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine or build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.token_service = TokenService(
        secret_key=settings.jwt_secret,
        lifetime_seconds=settings.token_lifetime,
        algorithm=settings.jwt_algorithm,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    register_routers(app, settings.api_prefix)

    # Register base routes
    register_base_routes(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)


def register_routers(app: FastAPI, prefix: str) -> None:
    """Register API routers"""
    for router in (auth.router, transactions.router, admin.router, reference.router):
        app.include_router(router, prefix=prefix)
        logger.debug(f"Router registered: {prefix}{router.prefix or '/'}")


def register_base_routes(app: FastAPI) -> None:
    """Register base application routes"""

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "message": "Finance Tracker API",
            "version": "0.1.0",
            "status": "running",
            "docs_url": "/docs" if app.state.settings.debug else "disabled",
            "features": [
                "Password login with JWT access tokens",
                "Role-based admin access",
                "Per-account ownership checks",
                "Personal Finance Tracking"
            ]
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        try:
            with app.state.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            database_status = "operational"
        except SQLAlchemyError as e:
            logger.error(f"Health check database error: {e}")
            database_status = "unavailable"

        return {
            "status": "healthy" if database_status == "operational" else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "0.1.0",
            "services": {
                "api": "operational",
                "database": database_status,
            }
        }


# Create application instance
app = create_application()


if __name__ == "__main__":
    """
    Development server entry point

    For production use:
    gunicorn -w 4 -k uvicorn.workers.UvicornWorker app.main:app
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=app.state.settings.debug,
        log_level=app.state.settings.log_level.lower()
    )
