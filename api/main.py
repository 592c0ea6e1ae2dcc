"""
api/main.py -- FastAPI application entry point for Homeroom.

Run with:      uvicorn asgi:app --reload
               python main.py --reload

Middleware stack (outermost to innermost):
  1. TrustedHostMiddleware -- rejects requests with unexpected Host headers
  2. CORSMiddleware        -- adds CORS headers for allowed browser origins
  3. SlowAPIMiddleware     -- enforces the default rate limit from api.limiter

Lifespan builds the three stores and the services on top of them at startup
and disposes the engines at shutdown. Routes reach them through app.state.

Error mapping: HomeroomError subclasses carry a stable code; _STATUS_BY_CODE
turns that code into an HTTP status. Everything else is a generic 500.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError

from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.v1.auth import router as auth_router
from api.routes.v1.tasks import router as tasks_router
from api.routes.v1.timetables import router as timetables_router
from auth.service import CredentialService
from auth.store import CredentialStore
from core.config import get_settings
from core.errors import HomeroomError, IDIsNotZero, InvalidID, InvalidToken, InvalidUsername, TimetablesNotFound
from tasks.store import TaskStore
from tasks.usecase import TaskUsecase
from timetables.store import TimetablesStore
from timetables.usecase import TimetablesUsecase

VERSION = "0.1.0"

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("homeroom.api")


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def wire_state(
    app: FastAPI,
    credential_store: CredentialStore,
    task_store: TaskStore,
    timetables_store: TimetablesStore,
) -> None:
    """Attach stores and the services built on them to app.state.

    Shared by the real lifespan and the test lifespan so both wire the
    application identically.
    """
    credential_service = CredentialService(credential_store)
    app.state.credential_store = credential_store
    app.state.task_store = task_store
    app.state.timetables_store = timetables_store
    app.state.credential_service = credential_service
    app.state.task_usecase = TaskUsecase(credential_service, task_store)
    app.state.timetables_usecase = TimetablesUsecase(credential_service, timetables_store)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the stores on startup and dispose their engines on shutdown."""
    logger.info("Homeroom API starting up")
    db_url = _settings.database_url
    wire_state(app, CredentialStore(db_url), TaskStore(db_url), TimetablesStore(db_url))
    logger.info("Stores initialized (%s)", db_url.split("://", 1)[0])

    yield

    app.state.credential_store.close()
    app.state.task_store.close()
    app.state.timetables_store.close()
    logger.info("Homeroom API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Homeroom API",
    description="Per-user tasks and weekly class timetables behind session tokens.",
    version=VERSION,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware, added innermost first: SlowAPI -> CORS -> TrustedHost.
# ---------------------------------------------------------------------------

app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", _settings.token_header],
    max_age=3600,
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=_settings.allowed_hosts,
)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


# ---------------------------------------------------------------------------
# Request log: one line per request. Headers are left out, they hold the token.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    client = request.client.host if request.client else "-"
    logger.info("%s %s -> %d in %.1fms (%s)", request.method, request.url.path, response.status_code, elapsed_ms, client)
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api/v1", tags=["Auth"])
app.include_router(tasks_router, prefix="/api/v1", tags=["Tasks"])
app.include_router(timetables_router, prefix="/api/v1", tags=["Timetables"])


# ---------------------------------------------------------------------------
# Exception handlers. Every error body is {"error": {"code", "message", "detail"}}.
# ---------------------------------------------------------------------------

_STATUS_BY_CODE: dict[str, int] = {
    InvalidToken.code: 401,
    InvalidID.code: 400,
    IDIsNotZero.code: 400,
    InvalidUsername.code: 400,
    TimetablesNotFound.code: 404,
}


def _error_response(status_code: int, code: str, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(),
    )


@app.exception_handler(HomeroomError)
async def homeroom_error_handler(request: Request, exc: HomeroomError) -> JSONResponse:
    """Map a domain error to its status. Unmapped codes are treated as internal."""
    status_code = _STATUS_BY_CODE.get(exc.code)
    if status_code is None:
        logger.error("Unmapped error code %r on %s %s", exc.code, request.method, request.url.path)
        return _error_response(500, "internal_error", "An unexpected error occurred.")
    return _error_response(status_code, exc.code, str(exc))


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 rate_limited, with Retry-After."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = _error_response(429, "rate_limited", "Too many requests.", str(exc))
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed payloads are a 400, with the validation errors as detail."""
    return _error_response(400, "invalid_json_format", "Invalid JSON format.", str(exc.errors()))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Wrap HTTPException in the error envelope; a dict detail is the error itself."""
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    return _error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unhandled and answer 500 internal_error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, "internal_error", "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Health. Not rate limited.
# ---------------------------------------------------------------------------


@app.get("/api/v1/health", tags=["Health"])
@limiter.exempt
def health(request: Request) -> HealthResponse:
    """Return liveness, version and a database round-trip check."""
    try:
        database = "ok" if request.app.state.credential_store.ping() else "error"
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        database = "error"
    return HealthResponse(version=VERSION, components={"app": "ok", "database": database})
