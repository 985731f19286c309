# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .routes import address, health, id_docs, register, selfie
from .schemas.envelope import ErrorCode, failure
from .services.audit import init_audit_log
from .services.storage import init_storage_service

logger = logging.getLogger(__name__)


def log_latency_status() -> None:
    """Log whether mocked verification responses are delayed. Call at startup."""
    if settings.SIMULATE_LATENCY:
        logger.warning(
            "Simulated verification latency: ACTIVE (register=%dms, selfie=%dms, address=%dms)",
            settings.REGISTER_DELAY_MS,
            settings.SELFIE_DELAY_MS,
            settings.ADDRESS_DELAY_MS,
        )
    else:
        logger.warning("Simulated verification latency: DISABLED")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logger.info("Starting %s", settings.APP_NAME)
    init_storage_service(settings)
    init_audit_log(settings)
    log_latency_status()
    yield


app = FastAPI(
    title="KYC Onboarding API",
    description="Identity verification onboarding: registration, selfie, ID documents, "
    "proof of address",
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

_STATUS_ERROR_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.INVALID_BODY,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    413: ErrorCode.FILE_TOO_LARGE,
    422: ErrorCode.INVALID_BODY,
    500: ErrorCode.INTERNAL_ERROR,
}


def _error_response(status_code: int, code: ErrorCode | str, message: str, details=None):
    body = failure(code, message, details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException (and KycHTTPException) to an error envelope."""
    code = getattr(exc, "code", None) or _STATUS_ERROR_CODES.get(
        exc.status_code, ErrorCode.INTERNAL_ERROR
    )
    return _error_response(exc.status_code, code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are a client error, reported as INVALID_BODY."""
    return _error_response(
        400,
        ErrorCode.INVALID_BODY,
        "Request body is malformed.",
        details=jsonable_encoder(exc.errors(), exclude={"ctx", "input"}),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    return _error_response(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred.")


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(register.router, prefix=settings.API_PREFIX, tags=["identity"])
app.include_router(selfie.router, prefix=settings.API_PREFIX, tags=["biometrics"])
app.include_router(id_docs.router, prefix=settings.API_PREFIX, tags=["documents"])
app.include_router(address.router, prefix=settings.API_PREFIX, tags=["documents"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the KYC Onboarding API"}
