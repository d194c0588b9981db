"""
CoolApp - Main Application.

FastAPI application exposing the weather forecast stores.
"""

import logging
import sys
import traceback
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID, uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coolapp import __version__
from coolapp.config import get_settings
from coolapp.exceptions import CoolAppException
from coolapp.modules.forecasts.generator import ForecastGenerator
from coolapp.modules.forecasts.router import second_source_router, weatherforecast_router
from coolapp.modules.forecasts.store import DataContext
from coolapp.observability import get_metrics_store
from coolapp.schemas import HealthResponse

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("coolapp")


def _request_uuid(request: Request) -> UUID | None:
    request_id_str = getattr(request.state, "request_id", None)
    if request_id_str:
        try:
            return UUID(request_id_str)
        except (ValueError, TypeError):
            pass
    return None


def _error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    request_id = _request_uuid(request)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
                "request_id": str(request_id) if request_id else None,
            }
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting CoolApp API v{__version__} "
        f"[env={settings.app_env}] "
        f"[features={settings.features.to_dict()}]"
    )
    yield
    logger.info("Shutting down CoolApp API")


def create_app(
    data_context: DataContext | None = None,
    generator: ForecastGenerator | None = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Build an application that owns its own forecast stores."""
    app = FastAPI(
        title="CoolApp API",
        description="Weather forecast CRUD over two independent in-memory stores.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.data_context = data_context or DataContext()
    app.state.generator = generator or ForecastGenerator()
    app.state.today = today

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        response = await call_next(request)

        logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

        return response

    # Registered last so it runs first and the logger above sees the ID
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(CoolAppException)
    async def coolapp_exception_handler(request: Request, exc: CoolAppException):
        """Handle CoolApp custom exceptions."""
        logger.warning(f"CoolAppException: {exc.code} - {exc.message}")
        return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report unparseable requests in the same shape as field validation."""
        errors = {}
        for error in exc.errors():
            field = str(error["loc"][-1]) if error.get("loc") else "request"
            errors.setdefault(field, error.get("msg", "Invalid value"))
        get_metrics_store().record_error("VALIDATION_ERROR")
        logger.warning(f"Request validation failed on {request.url.path}: {errors}")
        return _error_response(
            request, 400, "VALIDATION_ERROR", "Request is invalid", {"errors": errors}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.url.path}")
        logger.error(f"Exception type: {type(exc).__name__}")
        logger.error(f"Exception message: {str(exc)}")
        logger.error(f"Traceback:\n{traceback.format_exc()}")
        get_metrics_store().record_error("INTERNAL_ERROR")

        message = str(exc) if get_settings().app_debug else "An unexpected error occurred"
        return _error_response(request, 500, "INTERNAL_ERROR", message)

    # =========================================================================
    # Health / Metrics
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        settings = get_settings()
        context: DataContext = request.app.state.data_context
        return HealthResponse(
            status="healthy",
            version=__version__,
            features=settings.features.to_dict(),
            app_env=settings.app_env,
            is_production=settings.is_production,
            store_sizes={name: len(store) for name, store in context.stores().items()},
        )

    @app.get("/metrics", tags=["health"])
    def get_metrics() -> dict:
        """Operation latencies and error counts since startup."""
        return get_metrics_store().get_summary()

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint redirect to docs."""
        return {"message": "Welcome to CoolApp API", "docs": "/docs"}

    # =========================================================================
    # Register Module Routers
    # =========================================================================

    app.include_router(weatherforecast_router)
    app.include_router(second_source_router)

    return app


app = create_app()
