"""
FastAPI application entry point for the Scenic Inn group booking API.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api.deps import build_catalog, build_workflow
from apps.api.routers import booking, menus
from core.logging import get_logger, setup_logging
from core.settings import Settings, settings
from domain.errors import MalformedRequest
from domain.models import HealthResponse
from services.booking_workflow import BookingWorkflow
from services.menu_catalog import CatalogReader


# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.
    Handles startup and shutdown events.
    """
    config: Settings = app.state.settings
    logger.info(
        "Starting group booking API",
        extra={
            "app_name": config.app_name,
            "environment": config.app_env,
            "version": config.app_version,
            "catalog_backend": config.catalog_backend.value,
            "mail_backend": config.mail_backend.value,
            "confirmation_delivery": config.confirmation_delivery.value,
        }
    )

    yield

    logger.info("Shutting down group booking API")


def _describe_validation_error(exc: RequestValidationError) -> str:
    """First schema error as ``field.path: message``."""
    errors = exc.errors()
    if not errors:
        return "request body is invalid"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    # Anything after the first colon may quote the submitted value
    message = first.get("msg", "invalid value").split(": ", 1)[0]
    return f"{location}: {message}" if location else message


def create_app(
    config: Optional[Settings] = None,
    catalog: Optional[CatalogReader] = None,
    workflow: Optional[BookingWorkflow] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings (defaults to the environment-derived settings)
        catalog: Catalog reader (defaults to the configured backend)
        workflow: Booking workflow (defaults to one wired from settings)
    """
    config = config or settings

    app = FastAPI(
        title=config.app_name,
        description="Group booking API: menus, lead-time validation and emailed confirmations",
        version=config.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.state.settings = config
    app.state.catalog = catalog or build_catalog(config)
    app.state.workflow = workflow or build_workflow(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = MalformedRequest(_describe_validation_error(exc))
        logger.info(f"Malformed request to {request.url.path}: {error.detail}")
        return JSONResponse(status_code=error.status_code, content={"error": error.user_message})

    app.include_router(menus.router, prefix=config.api_prefix)
    app.include_router(booking.router, prefix=config.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": config.app_name,
            "version": config.app_version,
            "status": "running",
            "environment": config.app_env
        }

    @app.get(f"{config.api_prefix}/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="OK",
            message=f"{config.venue_name} Booking API",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=config.app_version,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower()
    )
