"""
FastAPI main application for the backtest results API.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from src.config.settings import Settings, get_settings
from src.core.exceptions.backtest import (
    BacktestException,
    BacktestNotFoundError,
    DataError,
    InvalidFormatError,
    ValidationError,
)
from src.core.logging_setup import configure_logging

from .routers import backtest
from .schemas.api_models import ErrorResponse

API_TITLE = "Backtest Results API"
API_VERSION = "1.0.0"


def _error(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))


async def not_found_handler(request: Request, exc: BacktestNotFoundError) -> JSONResponse:
    return _error(
        404,
        ErrorResponse(
            error="not_found",
            message=f"Backtest {exc.backtest_id} not found",
            backtest_id=exc.backtest_id,
        ),
    )


async def invalid_format_handler(request: Request, exc: InvalidFormatError) -> JSONResponse:
    logger.warning(f"Rejected document for {request.url.path}: {exc.missing_fields}")
    return _error(
        400,
        ErrorResponse(
            error="invalid_format",
            message="Backtest document is missing required fields",
            missing_fields=exc.missing_fields,
            details={"schema_version": exc.schema_version} if exc.schema_version else None,
        ),
    )


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, ErrorResponse(error="validation_error", message=str(exc)))


async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
    logger.opt(exception=exc).error(f"Data error serving {request.url.path}")
    return _error(
        500, ErrorResponse(error="data_error", message="Stored backtest could not be read")
    )


async def backtest_error_handler(request: Request, exc: BacktestException) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled backtest error serving {request.url.path}")
    return _error(500, ErrorResponse(error="internal_error", message="Internal error"))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; logging is configured when it starts."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level, settings.log_json)
        logger.info(f"{API_TITLE} {API_VERSION} starting (data dir {settings.data_dir})")
        yield
        logger.info(f"{API_TITLE} shutting down")

    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description="Serves stored trading backtests and the statistics derived from them",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    )

    # Starlette resolves handlers along the exception MRO, most specific first
    app.add_exception_handler(BacktestNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidFormatError, invalid_format_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.add_exception_handler(BacktestException, backtest_error_handler)

    app.include_router(backtest.router, prefix="/api/backtest", tags=["backtest"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning API information."""
        return {"message": API_TITLE, "version": API_VERSION, "status": "running"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
