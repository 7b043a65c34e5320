"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from transcription_proxy import __version__
from transcription_proxy.api import health, metadata, session, transcription
from transcription_proxy.config import get_settings
from transcription_proxy.core.deepgram import DeepgramClient
from transcription_proxy.core.errors import ApiError, error_body, not_found_body

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = """Deepgram API key not found!

Please set your API key using one of these methods:

1. Create a .env file (recommended):
   DEEPGRAM_API_KEY=your_api_key_here

2. Environment variable:
   export DEEPGRAM_API_KEY=your_api_key_here

Get your API key at: https://console.deepgram.com
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - open the shared Deepgram client."""
    config = get_settings()
    if not config.deepgram_api_key:
        logger.error(MISSING_API_KEY_MESSAGE)
        raise RuntimeError("DEEPGRAM_API_KEY is not set")

    http_client = httpx.AsyncClient(timeout=config.upstream_timeout_seconds)
    app.state.deepgram = DeepgramClient(
        http_client,
        api_key=config.deepgram_api_key,
        base_url=config.deepgram_base_url,
        timeout_seconds=config.upstream_timeout_seconds,
    )
    logger.info(f"Transcription proxy v{__version__} ready (default model: {config.default_model})")

    yield

    app.state.deepgram = None
    await http_client.aclose()


app = FastAPI(
    title="Transcription Proxy",
    description="Session-protected proxy for Deepgram speech-to-text",
    version=__version__,
    lifespan=lifespan,
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Send CORS headers on every response and answer any OPTIONS with 204."""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and wrong methods on known paths share one fallback
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=not_found_body(request.method, request.url.path),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(error.get("msg", "invalid value") for error in exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "type": "ValidationError",
                "code": "INVALID_REQUEST",
                "message": message or "Invalid request",
                "details": {"originalError": message},
            }
        },
    )


# Register routers
app.include_router(health.router)
app.include_router(session.router)
app.include_router(metadata.router)
app.include_router(transcription.router)


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "transcription_proxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
