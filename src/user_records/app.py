"""
User Records API Server
CRUD over the users table plus a database health check
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_records.config import settings
from user_records.database.connection import PersistenceGateway, PostgresGateway
from user_records.api.routes import health, users
from user_records.services.bootstrap import bootstrap_database
from user_records.services.user_service import UserService
from user_records.utils.app_logger import AppLogger, JsonLineLogger
from user_records.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(
    gateway: Optional[PersistenceGateway] = None,
    app_logger: Optional[AppLogger] = None,
    bootstrap_strict: Optional[bool] = None,
) -> FastAPI:
    """
    Build the FastAPI application

    The gateway and application logger are created from settings unless
    supplied; the user service receives both at construction.
    """
    if gateway is None:
        gateway = PostgresGateway(
            settings.get_database_dsn(),
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            command_timeout=settings.DB_COMMAND_TIMEOUT
        )
    if app_logger is None:
        app_logger = JsonLineLogger(settings.LOG_DIR)
    if bootstrap_strict is None:
        bootstrap_strict = settings.DB_BOOTSTRAP_STRICT

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        app_logger.start()
        try:
            await bootstrap_database(gateway, app_logger, strict=bootstrap_strict)
            logger.info(f"Health check: http://localhost:{settings.PORT}/health")
            logger.info(f"API Users: http://localhost:{settings.PORT}/api/users")
            yield
        finally:
            await gateway.close()
            app_logger.stop()

    app = FastAPI(
        title="User Records API",
        description="CRUD service for user records with a database health check",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.gateway = gateway
    app.state.app_logger = app_logger
    app.state.user_service = UserService(gateway, app_logger)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])

    return app


# FastAPI app instance is exported for use by uvicorn
app = create_app()
