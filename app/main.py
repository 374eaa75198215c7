"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
import logging
from typing import Dict, Any, Iterable, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import Settings, get_settings
from app.domain.services.billing_calendar import Clock, SystemClock
from app.infrastructure.db.database import create_db_engine, create_session_factory
from app.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from app.infrastructure.web.routers import (
    admin,
    charges,
    clients,
    dashboard,
    integrations,
)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def init_sentry(settings: Settings, integrations: Iterable) -> bool:
    """Start error reporting when a DSN is configured outside development."""
    if not settings.sentry_dsn or settings.is_development:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        environment=settings.environment,
        integrations=list(integrations),
    )
    logger.info("Sentry initialized")
    return True


def create_application(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    clock: Optional[Clock] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The database engine and session factory are created here, once per
    process, unless a session factory is given.
    """
    settings = settings or get_settings()
    configure_logging(settings.debug)

    engine = None
    if session_factory is None:
        engine = create_db_engine(settings.sqlalchemy_database_url, echo=settings.database_echo)
        session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle.
        """
        logger.info(f"Starting {settings.api_title} v{settings.api_version}")
        logger.info(f"Environment: {settings.environment}, timezone: {settings.timezone}")
        init_sentry(settings, [FastApiIntegration(transaction_style="endpoint"), SqlalchemyIntegration()])
        yield
        logger.info("Shutting down application")
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.clock = clock or SystemClock(settings.timezone)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom error handler middleware
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)
    register_exception_handlers(app)

    # Include routers
    app.include_router(
        clients.router,
        prefix=f"{settings.api_prefix}/clients",
        tags=["Clients"]
    )
    app.include_router(
        charges.router,
        prefix=f"{settings.api_prefix}/cobrancas",
        tags=["Cobranças"]
    )
    app.include_router(
        integrations.router,
        prefix=f"{settings.api_prefix}/integrations",
        tags=["Integrations"]
    )
    app.include_router(
        dashboard.router,
        prefix=f"{settings.api_prefix}/dashboard",
        tags=["Dashboard"]
    )
    app.include_router(
        admin.router,
        prefix=f"{settings.api_prefix}/admin",
        tags=["Administration"]
    )

    # Health check endpoint
    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "version": settings.api_version
        }

    # Custom 404 handler
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        """Custom 404 error handler."""
        return JSONResponse(
            status_code=404,
            content={
                "error": "NOT_FOUND",
                "message": f"Rota {request.url.path} não encontrada",
                "path": request.url.path
            }
        )

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
