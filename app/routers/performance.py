"""Performance report endpoint:
    GET  /api/v1/performance
"""

from __future__ import annotations

import logging
import os
import threading
import time

import psutil

from fastapi import APIRouter

from app.config import settings
from app.models.schemas import PerformanceResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=settings.API_PREFIX,
    tags=["Performance"],
)

# ── Module-level state ────────────────────────────────────────────────────
_start_time: float = time.monotonic()
_last_response_time_ms: float = 0.0  # updated by the timing middleware


def reset_start_time() -> None:
    """Called at application startup to anchor the uptime clock."""
    global _start_time
    _start_time = time.monotonic()


def record_response_time(elapsed_ms: float) -> None:
    """Called by the timing middleware after every request."""
    global _last_response_time_ms
    _last_response_time_ms = elapsed_ms


def format_duration(milliseconds: float) -> str:
    """Format a duration in ms as HH:mm:ss.SSS."""
    total_ms = int(milliseconds)
    seconds, millis = divmod(total_ms, 1000)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def memory_mb() -> float:
    """Current process RSS in MiB."""
    return psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)


# ── Endpoint ──────────────────────────────────────────────────────────────

@router.get(
    "/performance",
    response_model=PerformanceResponse,
    summary="System performance metrics",
)
async def performance_report() -> PerformanceResponse:
    """Return last response time, uptime, memory usage, and active thread count."""
    uptime_ms = (time.monotonic() - _start_time) * 1000
    return PerformanceResponse(
        time=format_duration(_last_response_time_ms),
        uptime=format_duration(uptime_ms),
        memory=f"{memory_mb():.2f} MB",
        threads=threading.active_count(),
    )
