"""
Visit counter for the static /app surface.

One HitCounter is created per application and shared by every request
through app.state. Increments from concurrent requests may interleave in any
order but are never lost.
"""

from __future__ import annotations

import logging
from threading import Lock

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

APP_PREFIX = "/app"


class HitCounter:
    def __init__(self) -> None:
        self._hits = 0
        self._lock = Lock()

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def value(self) -> int:
        with self._lock:
            return self._hits

    def reset(self) -> None:
        """Set the count back to zero. Callers must check the dev-platform gate first."""
        with self._lock:
            self._hits = 0
        logger.info("Hit counter reset")


def is_counted_path(path: str) -> bool:
    return path == APP_PREFIX or path.startswith(APP_PREFIX + "/")


class HitCounterMiddleware(BaseHTTPMiddleware):
    """
    Count one hit per request to the /app surface.

    Installing the middleware does not touch the counter; only requests do.
    """

    def __init__(self, app: ASGIApp, counter: HitCounter) -> None:
        super().__init__(app)
        self.counter = counter

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if is_counted_path(request.url.path):
            self.counter.increment()
        return await call_next(request)
