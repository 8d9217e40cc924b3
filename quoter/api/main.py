"""FastAPI application for the hybrid venue quoter.

Rate limiting is left to the reverse proxy in front of the service.
"""

import os

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from quoter import __version__
from quoter.api.endpoints import get_config, router
from quoter.api.schemas import ErrorResponse, HealthResponse
from quoter.config import QuoterConfig

logger = structlog.get_logger()

HOST = os.environ.get("QUOTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("QUOTER_PORT", "8000"))
DEBUG = os.environ.get("QUOTER_DEBUG", "false").lower() in ("true", "1", "yes")

# A lines account is the bulk of a snapshot; 10 MB holds several thousand slots
MAX_REQUEST_SIZE = 10 * 1024 * 1024

app = FastAPI(
    title="Hybrid Venue Quoter",
    description="Exact-input quotes against a constant-product AMM merged with a limit order book",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Answer oversized snapshots with the same error body as a failed quote."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        logger.warning("request_too_large", content_length=int(content_length))
        body = ErrorResponse(
            error="request_too_large",
            message=f"Request body exceeds {MAX_REQUEST_SIZE} bytes",
        )
        return JSONResponse(status_code=413, content=body.model_dump())
    return await call_next(request)


app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health(config: QuoterConfig = Depends(get_config)) -> HealthResponse:
    return HealthResponse(version=__version__, label=config.label)


def run() -> None:
    """Serve the quote API with uvicorn.

    QUOTER_HOST and QUOTER_PORT pick the bind address (default 0.0.0.0:8000);
    QUOTER_DEBUG turns on auto-reload.
    """
    uvicorn.run("quoter.api.main:app", host=HOST, port=PORT, reload=DEBUG)


if __name__ == "__main__":
    run()
