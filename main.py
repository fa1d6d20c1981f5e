"""
MealScan FastAPI Application
Main entry point: lifespan, middleware, exception handlers and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
import inspect
from typing import Optional

from api.routes import (
    auth,
    meals,
    analysis,
    health_profile,
    subscriptions,
    payments,
    invites,
    admin,
    settings as settings_routes,
    health,
)

# Import database and adapters
from domain.models import init_database
from adapters import openai_adapter, image_storage

# Import configuration
from app.config import settings

# Import middleware
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    mealscan_exception_handler,
    general_exception_handler,
)
from app.exceptions import MealScanError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("mealscan.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Initializes the database with retries and prepares external clients.
    """
    is_coro_fn = inspect.iscoroutinefunction(init_database)
    last_exc: Optional[Exception] = None

    _logger.info(f"Starting MealScan in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            if is_coro_fn:
                await init_database()
            else:
                # Run blocking init in a thread to avoid blocking the event loop
                await anyio.to_thread.run_sync(init_database)

            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            last_exc = exc
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    image_storage.ensure_media_dir()
    openai_adapter.connect(settings.openai_api_key, settings.openai_timeout_sec)
    if not settings.stripe_secret_key:
        _logger.warning("STRIPE_SECRET_KEY not set; checkout is disabled")

    try:
        yield
    finally:
        _logger.info("Shutting down MealScan")
        openai_adapter.close()


app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(MealScanError, mealscan_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

for module in (
    auth,
    meals,
    analysis,
    health_profile,
    subscriptions,
    payments,
    invites,
    admin,
    settings_routes,
    health,
):
    app.include_router(module.router, prefix=settings.api_prefix)

# Stored meal photos
app.mount(
    settings.media_url_prefix,
    StaticFiles(directory=settings.media_dir, check_dir=False),
    name="media",
)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
