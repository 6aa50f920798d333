import uuid
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from costume import __version__
from costume.api.routes import costume, frontend, health
from costume.errors import CostumeError
from costume.logging import configure_logging

configure_logging()

logger = structlog.get_logger()

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="Costume Generator API",
    version=__version__,
    docs_url="/docs",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Attach a request ID to every request for log correlation.

    Bound into structlog context vars and echoed in the X-Request-ID header.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content={"error": message})
    response.headers["X-Request-ID"] = getattr(
        request.state, "request_id", request.headers.get("X-Request-ID", "")
    )
    return response


@app.exception_handler(CostumeError)
async def costume_error_handler(request: Request, exc: CostumeError) -> JSONResponse:
    """Surface pipeline errors as ``{"error": message}`` with their status.

    Upstream model errors keep the upstream status and body verbatim.
    """
    logger.warning(
        "costume_request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        status=exc.status_code,
    )
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Flatten Pydantic validation errors into the single error shape."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return _error_response(request, 422, "; ".join(messages))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """404/405 and friends use the same error shape as everything else."""
    response = _error_response(request, exc.status_code, str(exc.detail))
    for key, value in (exc.headers or {}).items():
        response.headers[key] = value
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(request, 500, "An unexpected error occurred")


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(health.router)
app.include_router(costume.router, prefix="/api")
app.include_router(frontend.router)
