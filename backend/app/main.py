"""FastAPI application bootstrap with router wiring."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.errors import register_error_handlers
from app.api.routers import health, products
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import init_db

logger = logging.getLogger(__name__)
request_logger = structlog.get_logger("app.request")

TRACE_ID_HEADER = "X-Trace-Id"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a trace id and log its outcome.

    The trace id is bound to structlog's context variables, so every log line
    emitted while the request is handled carries it.
    """

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_ID_HEADER) or uuid.uuid4().hex
        request.state.trace_id = trace_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers[TRACE_ID_HEADER] = trace_id
            request_logger.info(
                "request.complete",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(elapsed_ms, 1),
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

    logger.info(f"[CORS] Allowed origins: {settings.cors_origins}")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TRACE_ID_HEADER],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/products", tags=["products"])

    return app


app = create_app()
