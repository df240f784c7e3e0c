# src/blogdesk/main.py
"""Main entry point for the Blogdesk application."""

from __future__ import annotations

import logging
import time
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogdesk.api import admin_router, auth_router, posts_router, system_router
from blogdesk.core.exceptions import BlogdeskError, ConfigurationError
from blogdesk.core.logging_config import setup_logging
from blogdesk.core.settings import settings
from blogdesk.db.session import Database
from blogdesk.services.uploads import UPLOAD_URL_PREFIX, upload_root

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle for the life of the process."""
    database = Database(
        settings.effective_database_url,
        echo=settings.sql_debug,
        connect_timeout=settings.db_connect_timeout_seconds,
    )
    if not database.ping():
        database.dispose()
        raise ConfigurationError("Database is unreachable at startup")
    database.create_tables()
    upload_root()
    app.state.database = database
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    try:
        yield
    finally:
        app.state.database = None
        database.dispose()
        logger.info("Database connections closed")


# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Blogging platform API with drafts, premium posts and reader interactions",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    max_age=86400,
)


@app.middleware("http")
async def log_requests(request: Request, call_next: Any) -> Any:
    """Log one line per request with status and duration."""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


def _error_body(message: str, *, details: Any = None, exc: BaseException | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if not settings.is_production:
        if details is not None:
            body["details"] = details
        if exc is not None:
            body["stack"] = "".join(traceback.format_exception(exc))
    return body


@app.exception_handler(BlogdeskError)
async def handle_domain_error(request: Request, exc: BlogdeskError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, details=exc.details),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, details=jsonable_encoder(errors)),
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Database error", details=str(exc), exc=exc),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    message = "Internal server error" if settings.is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(message, exc=exc),
    )


# Include API routers
app.include_router(system_router)
app.include_router(auth_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(posts_router, prefix="/api")

app.mount(
    UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("blogdesk.main:app", host="0.0.0.0", port=5000)
