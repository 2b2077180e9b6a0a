import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("cueroom")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per API call with its status and duration in milliseconds"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Process-Time"] = f"{elapsed_ms:.1f}ms"
        if request.url.path.startswith("/api"):
            client = request.client.host if request.client else "-"
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {elapsed_ms:.0f}ms ({client})")
        return response
