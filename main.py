"""
NutriAdmin FastAPI Application
Main entry point wiring configuration, middleware, error handlers and routes
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import admin_meals, health
from adapters import mongo_adapter
from app.config import settings
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    service_validation_exception_handler,
    not_found_exception_handler,
    app_exception_handler,
    general_exception_handler,
)
from app.exceptions import AppError, ServiceValidationError, NotFoundError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("nutriadmin.main")


def _connect_database():
    db = mongo_adapter.connect(
        settings.mongo_uri,
        settings.mongo_db_name,
        timeout_ms=settings.mongo_server_selection_timeout_ms,
    )
    mongo_adapter.ensure_indexes(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Connects to MongoDB with retries and closes the client on shutdown.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # pymongo blocks; keep the event loop free
            await anyio.to_thread.run_sync(_connect_database)
            _logger.info("MongoDB connection established")
            break
        except Exception as exc:
            _logger.warning(
                "MongoDB connect attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error("MongoDB connection failed after %d attempts", attempt)
                raise

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        try:
            mongo_adapter.close()
        except Exception as e:
            _logger.exception("Error closing MongoDB adapter during shutdown: %s", e)


app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url="/openapi.json" if not settings.is_production() else None,
    docs_url="/docs" if not settings.is_production() else None,
    redoc_url="/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ServiceValidationError, service_validation_exception_handler)
app.add_exception_handler(NotFoundError, not_found_exception_handler)
app.add_exception_handler(AppError, app_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(health.router)
app.include_router(admin_meals.router, prefix=settings.admin_meals_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
