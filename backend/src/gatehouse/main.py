"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gatehouse.application.common.results import ErrorKind
from gatehouse.config import get_settings
from gatehouse.infrastructure.database.connection import dispose_engine, get_engine
from gatehouse.interfaces.api.results import error_envelope, failure_response
from gatehouse.interfaces.api.v1.router import v1_router
from gatehouse.interfaces.dependencies import HealthCheck

logger = logging.getLogger(__name__)

_KIND_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: warm up the engine
    get_engine()
    yield
    # Shutdown: clean up
    await dispose_engine()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    message = str(errors[0].get("msg", "Invalid request."))
    return message.removeprefix("Value error, ")


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return failure_response(_validation_message(exc), ErrorKind.VALIDATION)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        kind = _KIND_BY_STATUS.get(exc.status_code, ErrorKind.BAD_REQUEST)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(str(exc.detail), kind),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("An unhandled exception occurred")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "An error occurred while processing your request.",
                "errorCode": "InternalServerError",
            },
        )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Account registration and bearer-token authentication API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_exception_handlers(app)
    app.include_router(v1_router)

    @app.get("/health")
    async def health(database: HealthCheck):
        result = await database.check()
        return JSONResponse(
            status_code=status.HTTP_200_OK if result.is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": result.status.value,
                "version": settings.app_version,
                "checks": {database.name: result.description},
            },
        )

    return app


app = create_app()
