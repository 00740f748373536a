"""FastAPI entrypoint for the Tone Picker backend."""

from __future__ import annotations

from functools import lru_cache

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tonepicker import __version__, schemas
from tonepicker.config import settings
from tonepicker.errors import ToneError, UpstreamError
from tonepicker.logging_utils import configure_logging, get_logger
from tonepicker.services.cache import ResponseCache
from tonepicker.services.diff import sentence_diff
from tonepicker.services.rewrite import RewriteResult, RewriteService

configure_logging(level=settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Tone Picker Backend", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

response_cache = ResponseCache(ttl_seconds=settings.cache_ttl_ms / 1000)


@lru_cache(maxsize=1)
def get_rewrite_service() -> RewriteService:
    """Instantiate the rewrite service around the process-wide cache."""
    return RewriteService(
        model_config=settings.get_model_config(),
        cache=response_cache,
        timeout=settings.request_timeout_seconds,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    body = schemas.ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ToneError)
async def tone_error_handler(request: Request, exc: ToneError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error("Error %s: %s", request.url.path, exc)
    else:
        logger.warning("Rejected %s: %s", request.url.path, exc)
    return _error(exc.status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        details.append(f"{location}: {message}" if location else message)
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(details) or "Invalid request")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover
    logger.exception("Unhandled error on %s", request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error")


@app.get("/health", response_model=schemas.HealthResponse)
async def health() -> schemas.HealthResponse:
    """Liveness probe."""
    return schemas.HealthResponse()


@app.post(
    "/api/tone",
    response_model=schemas.ToneResponse,
    responses={400: {"model": schemas.ErrorResponse}, 500: {"model": schemas.ErrorResponse}},
)
async def rewrite_tone(
    payload: schemas.ToneRequest,
    service: RewriteService = Depends(get_rewrite_service),
) -> schemas.ToneResponse:
    """Rewrite text into the requested tone."""
    result: RewriteResult = await service.rewrite(payload.text, payload.to_tone_spec())

    text_preview = ""
    if settings.log_content_enabled:  # pragma: no cover
        text_preview = f" preview={payload.text[:200]!r}"

    logger.info(
        "Tone request processed | cached=%s latency_ms=%.2f text_len=%d%s",
        result.cached,
        result.latency_ms,
        len(payload.text),
        text_preview,
    )

    return schemas.ToneResponse(text=result.text, cached=result.cached)


@app.post("/api/diff", response_model=schemas.DiffResponse)
async def diff_texts(payload: schemas.DiffRequest) -> schemas.DiffResponse:
    """Sentence-level changes between two texts."""
    runs = sentence_diff(payload.old_text, payload.new_text)
    return schemas.DiffResponse(
        runs=[schemas.DiffRunModel(kind=run.kind, text=run.text) for run in runs],
    )


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
