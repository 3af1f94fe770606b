"""
Logging setup and the per-request logging middleware.
"""
from typing import Optional
import logging
import os
import sys
import time
import uuid

from fastapi import Request

from ..errors import unhandled_exception_handler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Send log records to stdout, and to <log_dir>/task_service.log when a log directory is configured.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "task_service.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    start = time.perf_counter()

    if request.url.path.startswith("/api"):
        logger.info("API call detected: %s", request.url.path)

    try:
        response = await call_next(request)
    except Exception as exc:
        # Unhandled errors still get the request headers and a log line
        response = await unhandled_exception_handler(request, exc)

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{duration_ms:.1f}ms"
    logger.info(
        "%s %s %s %.1fms request_id=%s",
        request.method, request.url.path, response.status_code, duration_ms, request_id
    )
    return response
