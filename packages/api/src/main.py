# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import RecoveryError, classify_db_error
from .routes import calculator, customers, health, history, responses
from .schemas.error import ErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SVF Recovery API",
    description="Field-agent loan recovery visit tracking",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    408: "Request Timeout",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _build_error(status_code: int, detail: str, request_id: str, **extra) -> ErrorResponse:
    return ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        request_id=request_id,
        **extra,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    body = _build_error(exc.status_code, str(exc.detail), _request_id(request))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    body = _build_error(422, str(exc.errors()), _request_id(request))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(RecoveryError)
async def recovery_error_handler(request: Request, exc: RecoveryError):
    """Render service-layer errors with their kind and retry hint."""
    request_id = _request_id(request)
    if exc.status_code >= 500:
        logger.error(
            "%s (request_id=%s): %s",
            exc.kind.value,
            request_id,
            exc.__cause__ or exc,
        )
    debug = None
    if settings.DEBUG and exc.__cause__ is not None:
        debug = str(exc.__cause__)
    body = _build_error(
        exc.status_code,
        exc.message,
        request_id,
        error_kind=exc.kind.value,
        retryable=exc.retryable,
        errors=exc.errors,
        debug=debug,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(DBAPIError)
async def database_error_handler(request: Request, exc: DBAPIError):
    """Driver errors that escape a read endpoint, classified like save errors."""
    error = classify_db_error(exc)
    error.__cause__ = exc
    return await recovery_error_handler(request, error)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    body = _build_error(
        500,
        "An unexpected error occurred.",
        request_id,
        error_kind="unexpected",
        debug=str(exc) if settings.DEBUG else None,
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(customers.router, prefix="/api", tags=["customers"])
app.include_router(responses.router, prefix="/api/responses", tags=["responses"])
app.include_router(history.router, prefix="/api", tags=["history"])
app.include_router(calculator.router, prefix="/api/calculator", tags=["calculator"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "SVF Recovery API running"}
