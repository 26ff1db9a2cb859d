"""FastAPI application for the user-management service."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, PlainTextResponse

from fitness_users.api.http.app_data import ApplicationDependencies
from fitness_users.api.http.routers.users import router as users_router
from fitness_users.api.utils.app_startup import configure_logging
from fitness_users.core.errors import (
    DomainError,
    DuplicateEmailError,
    InvalidInputError,
    InvalidStateError,
    UserNotFoundError,
)
from fitness_users.core.services import DbManageService, DbSessionService
from fitness_users.runtime.context import get_config

configure_logging()

__all__ = ["app", "startup", "shutdown"]


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


def _build_app() -> FastAPI:
    app_config = get_config().app
    is_production = app_config.environment == "production"

    if is_production and "*" in app_config.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application = FastAPI(
        title="Fitness Users",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.cors.origins,
        allow_credentials=app_config.cors.allow_credentials,
        allow_methods=app_config.cors.allow_methods,
        allow_headers=app_config.cors.allow_headers,
    )
    return application


app = _build_app()


# --- Request logging ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()

    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown",
    ):
        logger.info("request.start")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.bind(
                status_code=500,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return PlainTextResponse(
                "Internal Server Error",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                headers={"X-Request-ID": request_id},
            )

        logger.bind(
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Error rendering ---
_ERROR_STATUS: dict[type[DomainError], int] = {
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEmailError: status.HTTP_409_CONFLICT,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
}


@app.exception_handler(DomainError)
async def handle_domain_error(request: Request, exc: DomainError) -> PlainTextResponse:
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.bind(status_code=status_code, error_type=type(exc).__name__).warning(
        "request.rejected: {}", exc.message
    )
    return PlainTextResponse(exc.message, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.bind(status_code=400, error_type=type(exc).__name__).warning(
        "request.invalid: {}", message
    )
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


app.include_router(users_router)


# --- Lifecycle ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()


# --- Operational endpoints ---
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness: the process is serving requests."""
    return {"status": "healthy"}


@app.get("/ready")
async def readiness(request: Request) -> JSONResponse:
    """Readiness: the database answers a trivial query."""
    app_dependencies: ApplicationDependencies = request.app.state.app_dependencies
    if not app_dependencies.database_service.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return JSONResponse(content={"status": "ready"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # requests are logged by log_requests
    )
