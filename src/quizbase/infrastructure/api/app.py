"""FastAPI application.

``create_app`` assembles CORS, the health probes, the ``/auth``, ``/users``
and ``/questions`` routers under the API prefix, the error handlers and the
correlation-id middleware. Domain errors become
``{"error": <kind>, "message": <text>}`` with the status code from
``ERROR_STATUS_CODES``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quizbase.core.config import Settings, get_settings
from quizbase.core.exceptions import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    QuizBaseError,
    UnauthorizedError,
)
from quizbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from quizbase.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

CORRELATION_ID_HEADER = "X-Correlation-ID"

ERROR_STATUS_CODES: dict[type[QuizBaseError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}

logger = get_logger("quizbase.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Starting QuizBase",
        version=settings.app_version,
        environment=settings.environment,
    )
    await init_database()

    yield

    await close_database()
    logger.info("QuizBase stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the QuizBase application."""
    settings = settings or get_settings()

    # Interactive docs are only served in development
    docs_enabled = settings.is_development
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Multiple-choice question bank with token authentication",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app, settings)
    register_routes(app, settings)
    register_exception_handlers(app, settings)
    register_middleware(app)
    return app


def register_health_check(app: FastAPI, settings: Settings) -> None:
    service = {"service": settings.app_name, "version": settings.app_version}

    @app.get("/health", tags=["health"])
    async def health_check():
        """Liveness: the process is up. Dependencies are not checked."""
        return {"status": "healthy", **service}

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness: 200 when the database answers, 503 otherwise."""
        if await get_db_manager().check_connection():
            return {"status": "ready", "database": "connected", **service}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "database": "disconnected", **service},
        )


def register_routes(app: FastAPI, settings: Settings) -> None:
    from quizbase.infrastructure.api.routes import (
        auth_router,
        questions_router,
        users_router,
    )

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(questions_router, prefix=f"{prefix}/questions", tags=["questions"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def error_status_code(exc: QuizBaseError) -> int:
    """Status code for a domain error; 500 for kinds without a mapping."""
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(QuizBaseError)
    async def domain_error_handler(request: Request, exc: QuizBaseError):
        status_code = error_status_code(exc)
        logger.info(
            "Request rejected",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            error=exc.kind,
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.kind, "message": exc.message},
            headers={"WWW-Authenticate": "Bearer"}
            if isinstance(exc, UnauthorizedError)
            else None,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        """Bind the caller's correlation id (or a new one) to the request's log entries."""
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or new_correlation_id()
        bind_correlation_id(correlation_id)
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            clear_context()


app = create_app()
