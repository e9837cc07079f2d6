"""
TranslationFlow API application.

``create_app`` wires settings, the database client, routers, CORS, request
logging and error mapping; ``app`` is the ASGI object uvicorn serves.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from translationflow import __version__
from translationflow.api.v1.router import api_router
from translationflow.config import Settings, get_settings
from translationflow.database import Database
from translationflow.exceptions import (
    PhaseTransitionError,
    ProjectNotFoundError,
    TranslationFlowError,
    VersionConflictError,
    VideoNotFoundError,
)
from translationflow.utils.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables when configured to; dispose of the engine on shutdown."""
    settings: Settings = app.state.settings
    logger.info("TranslationFlow starting", version=__version__, debug=settings.debug)

    if settings.auto_create_tables:
        # Deployments with migrations leave this off
        await app.state.db.init_db()
        logger.info("Database tables ensured")

    yield

    await app.state.db.close()
    logger.info("TranslationFlow stopped")


def _error_response(status_code: int, exc: TranslationFlowError, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": code},
    )


def _internal_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    content = {"detail": "Internal server error", "code": "INTERNAL_ERROR"}
    if settings.debug:
        content["error"] = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map domain and infrastructure errors to HTTP responses."""

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found_handler(request: Request, exc: ProjectNotFoundError):
        logger.info("Project not found", project_id=exc.project_id, path=request.url.path)
        return _error_response(404, exc, "PROJECT_NOT_FOUND")

    @app.exception_handler(VideoNotFoundError)
    async def video_not_found_handler(request: Request, exc: VideoNotFoundError):
        logger.info("Video not found", video_id=exc.video_id, path=request.url.path)
        return _error_response(404, exc, "VIDEO_NOT_FOUND")

    @app.exception_handler(PhaseTransitionError)
    async def phase_transition_handler(request: Request, exc: PhaseTransitionError):
        logger.warning(
            "Phase transition rejected",
            phase=exc.phase,
            current=exc.current,
            requested=exc.requested,
        )
        return _error_response(409, exc, "PHASE_TRANSITION_REJECTED")

    @app.exception_handler(VersionConflictError)
    async def version_conflict_handler(request: Request, exc: VersionConflictError):
        logger.warning(
            "Version conflict",
            project_id=exc.project_id,
            expected=exc.expected,
            actual=exc.actual,
        )
        return _error_response(409, exc, "VERSION_CONFLICT")

    @app.exception_handler(ValueError)
    async def invalid_input_handler(request: Request, exc: ValueError):
        logger.warning("Invalid input", error=str(exc), path=request.url.path)
        return JSONResponse(status_code=400, content={"detail": str(exc), "code": "INVALID_INPUT"})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        content = {"detail": "Database unavailable", "code": "BACKEND_UNAVAILABLE"}
        if settings.debug:
            content["error"] = str(exc)
        return JSONResponse(status_code=503, content=content)

    # Route errors are answered by log_requests; this covers failures outside it
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", error=str(exc), path=request.url.path)
        return _internal_error_response(exc, settings)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The database client is constructed here and stored on ``app.state``;
    tests pass their own settings to get an isolated database.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Multilingual translation project workflow tracking",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings)

    app.include_router(api_router, prefix=settings.api_v1_prefix)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Bind a request id for the duration of the request and log the outcome."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        bind_context(request_id=request_id)
        started = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception("Unhandled error", error=str(exc), path=request.url.path)
                response = _internal_error_response(exc, settings)

            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()

    @app.get("/", tags=["Root"])
    async def index():
        return {
            "app": settings.app_name,
            "version": __version__,
            "docs": "/docs" if settings.debug else None,
            "health": f"{settings.api_v1_prefix}/health",
        }

    register_exception_handlers(app, settings)
    return app


app = create_app()
