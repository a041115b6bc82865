"""FastAPI application factory"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from switchdesk.core.config import Settings, get_settings
from switchdesk.core.logging import setup_logging
from switchdesk.core.state import AppState
from switchdesk.routers import (
    config_router,
    hardware_router,
    health_router,
    recordings_router,
    scenes_router,
    sources_router,
    streams_router,
    system_router,
    transition_router,
    ws_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.service_name} v{settings.version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Frontend URL: {settings.frontend_url}")

    state = AppState(settings)
    await state.startup()
    app.state.switchdesk = state
    logger.info(f"Channel endpoint ready at ws://{settings.host}:{settings.port}/ws")

    yield

    # Shutdown
    try:
        await state.shutdown()
    except Exception as e:
        logger.exception(f"Error during shutdown: {e}")
    finally:
        app.state.switchdesk = None


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail
        if exc.status_code == 404 and detail == "Not Found":
            detail = "Endpoint not found"
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": f"Invalid request: {location} {first.get('msg', '')}".strip(),
            },
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
        content = {"success": False, "error": "Internal server error"}
        if not settings.is_production:
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()

    # Setup logging first
    setup_logging(settings)

    # Create FastAPI app with lifespan
    app = FastAPI(
        title="Switchdesk API",
        description="Control API for a live production switcher",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.settings = settings
    app.state.switchdesk = None

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    # Register routers
    app.include_router(health_router.router)
    app.include_router(hardware_router.router)
    app.include_router(streams_router.router)
    app.include_router(recordings_router.router)
    app.include_router(scenes_router.router)
    app.include_router(sources_router.router)
    app.include_router(config_router.router)
    app.include_router(transition_router.router)
    app.include_router(system_router.router)
    app.include_router(ws_router.router)

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint - minimal service info"""
        return {
            "service": settings.service_name,
            "version": settings.version,
            "status": "running",
            "channel": "/ws",
        }

    logger.info("FastAPI application configured")

    return app
