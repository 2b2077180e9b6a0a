import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("cueroom")

# Path suffixes of mutations that require a bearer token
PROTECTED_SUFFIXES = ("/react", "/comments", "/bot-response", "/posts")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    """Flags anonymous calls to protected mutations and records auth failures"""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path.rstrip("/")
        anonymous = "authorization" not in request.headers

        if anonymous and request.method in ("POST", "DELETE") and path.endswith(PROTECTED_SUFFIXES):
            logger.warning(f"{request.method} {path} called without a bearer token")

        response = await call_next(request)

        if response.status_code == 401:
            logger.warning(f"Rejected unauthenticated {request.method} {path}")
        elif response.status_code == 403:
            logger.warning(f"Forbidden {request.method} {path}")
        return response
