import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vidboard.config import Settings, get_settings
from vidboard.exceptions import (
    AuthenticationError,
    ConfigError,
    ConflictError,
    NotFoundError,
    TranscriptUnavailableError,
    UnprocessableError,
    UpstreamError,
    ValidationError,
)
from vidboard.logging_config import configure_logging
from vidboard.models.common import ErrorResponse, FieldError, HealthResponse, ValidationErrorResponse
from vidboard.routers.favorites import router as favorites_router
from vidboard.routers.users import router as users_router
from vidboard.routers.youtube import router as youtube_router
from vidboard.services.aggregator import YouTubeAggregator
from vidboard.store import JsonStore

logger = logging.getLogger(__name__)

GENERIC_CONFIG_MESSAGE = "The service is not configured correctly. Contact the administrator."
REQUEST_LOCATIONS = ("query", "path", "body", "header")


def _error(status_code: int, error_code: str, message: str, errors: list[FieldError] | None = None) -> JSONResponse:
    if errors is None:
        body = ErrorResponse(error_code=error_code, message=message)
    else:
        body = ValidationErrorResponse(error_code=error_code, message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _field_name(loc: tuple) -> str:
    if loc and loc[0] in REQUEST_LOCATIONS:
        loc = loc[1:]
    parts = [str(part) for part in loc]
    return ".".join(parts) or "request"


def _register_exception_handlers(api: FastAPI) -> None:
    @api.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [FieldError(field=_field_name(err.get("loc", ())), message=err.get("msg", "")) for err in exc.errors()]
        return _error(400, "validation_error", "Invalid request parameters", errors=errors)

    @api.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        errors = [FieldError(field=exc.field, message=str(exc))] if exc.field else []
        return _error(400, "validation_error", str(exc), errors=errors)

    @api.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError):
        logger.error("Configuration error on %s: %s", request.url.path, exc)
        return _error(500, "config_error", GENERIC_CONFIG_MESSAGE)

    @api.exception_handler(AuthenticationError)
    async def auth_error_handler(request: Request, exc: AuthenticationError):
        return _error(401, "auth_error", str(exc))

    @api.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, "not_found", str(exc))

    @api.exception_handler(TranscriptUnavailableError)
    async def transcript_unavailable_handler(request: Request, exc: TranscriptUnavailableError):
        return _error(404, "transcript_unavailable", str(exc))

    @api.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _error(409, "conflict", str(exc))

    @api.exception_handler(UnprocessableError)
    async def unprocessable_handler(request: Request, exc: UnprocessableError):
        return _error(500, "unprocessable", str(exc))

    @api.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return _error(500, "upstream_error", str(exc))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its long-lived collaborators attached to ``app.state``.

    Missing credentials do not stop the app from starting; the first request
    that needs one answers with a configuration error.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    api = FastAPI(title="Vidboard", version="0.1.0")
    api.state.aggregator = YouTubeAggregator.from_settings(settings)
    api.state.store = JsonStore(settings.store_file)

    api.include_router(favorites_router)
    api.include_router(youtube_router)
    api.include_router(users_router)
    _register_exception_handlers(api)

    @api.get("/api/health")
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    return api


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run(
        "vidboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
