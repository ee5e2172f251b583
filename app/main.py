"""Income Tax Estimator API.

Wires the tax and performance routers into one FastAPI app, times every
request and, when a database is configured, keeps a row per request in
``request_logs``.

Run locally:
    uvicorn app.main:app --port 5477 --reload
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import close_db, get_session, init_db
from app.models.db_models import RequestLog
from app.routers import performance, tax
from app.routers.performance import memory_mb, record_response_time, reset_start_time

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    reset_start_time()
    db_ready = await init_db()
    logger.info(
        "Tax estimator ready on %s:%s (request log %s).",
        settings.APP_HOST, settings.APP_PORT, "on" if db_ready else "off",
    )
    yield
    await close_db()
    logger.info("Tax estimator stopped.")


async def _store_request_log(request: Request, response: Response, elapsed_ms: float) -> None:
    async with get_session() as session:
        if session is None:
            return
        session.add(
            RequestLog(
                endpoint=request.url.path,
                method=request.method,
                status_code=response.status_code,
                response_time_ms=round(elapsed_ms, 2),
                memory_mb=round(memory_mb(), 2),
                threads=threading.active_count(),
            )
        )


async def request_metrics(request: Request, call_next):
    """Stamp ``X-Response-Time-Ms`` and feed the performance report."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000

    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    record_response_time(elapsed_ms)
    try:
        await _store_request_log(request, response, elapsed_ms)
    except Exception as exc:
        logger.warning("Request log not stored for %s: %s", request.url.path, exc)
    return response


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. Please check the logs."},
    )


def create_app() -> FastAPI:
    application = FastAPI(
        title="Income Tax Estimator API",
        description=(
            "Indian income-tax estimates under the new and old regimes for "
            "FY 2024-25 and FY 2025-26: income and Chapter VI-A aggregation, "
            "slab rates, the 87A rebate and 4 % health & education cess."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # The estimator form is served from its own origin.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.middleware("http")(request_metrics)
    application.add_exception_handler(Exception, unhandled_error)

    application.include_router(tax.router)
    application.include_router(performance.router)

    @application.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "port": settings.APP_PORT}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT, reload=True)
