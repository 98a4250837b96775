# main.py
from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Dict, Type

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

# Import logging utilities early so that the logger configuration is
# applied before any other modules emit log messages.
from vend_api.logging_config import configure_logging, log_event, logger

from vend_api.clients.http_client import VendHTTPClient
from vend_api.core.config import get_settings
from vend_api.core.errors import (
    VendAuthError,
    VendCancelledError,
    VendCursorError,
    VendDecodeError,
    VendError,
    VendGatewayError,
    VendNotFoundError,
    VendRetryExhaustedError,
)
from vend_api.routes.resources import router as resources_router

# HTTP status returned to our own callers for each Vend failure.
ERROR_STATUS: Dict[Type[VendError], int] = {
    VendAuthError: 401,
    VendNotFoundError: 404,
    VendGatewayError: 502,
    VendDecodeError: 502,
    VendCursorError: 502,
    VendRetryExhaustedError: 504,
    VendCancelledError: 503,
}


def status_for_error(exc: VendError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one pooled client shared by every request
    app.state.http_client = VendHTTPClient()
    try:
        yield
    finally:
        app.state.http_client.close()


def create_app() -> FastAPI:
    configure_logging(get_settings().log_level.upper())
    app = FastAPI(title="Vend API", default_response_class=ORJSONResponse, lifespan=lifespan)

    app.include_router(resources_router)

    @app.exception_handler(VendError)
    async def vend_error_handler(request: Request, exc: VendError):
        status = status_for_error(exc)
        log_event(
            logging.ERROR,
            "vend_error",
            path=request.url.path,
            error=type(exc).__name__,
            detail=str(exc),
            status=status,
        )
        return ORJSONResponse(status_code=status, content={"error": type(exc).__name__, "detail": str(exc)})

    # Logs path, method, status and processing time of every request.
    @app.middleware("http")  # type: ignore[misc]
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(json.dumps({
            "event": "http_request",
            "path": request.url.path,
            "method": request.method,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }))
        return response

    return app


app = create_app()
