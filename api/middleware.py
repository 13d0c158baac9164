"""
HTTP middleware for the LittleChef API: response hardening and access logs.
"""

import logging
import re
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

_GEMINI_KEY = re.compile(r"AIza[0-9A-Za-z_\-]{35}")
_KEY_PARAM = re.compile(r"(key=)[^&\s]+")
_IMAGE_DATA = re.compile(r"data:image/[a-z+.-]+;base64,[A-Za-z0-9+/=]+")


def scrub_sensitive_data(content: str) -> str:
    """Mask API keys and inline image payloads before they reach the logs."""
    content = _GEMINI_KEY.sub("[GEMINI-KEY]", content)
    content = _KEY_PARAM.sub(r"\1[REDACTED]", content)
    return _IMAGE_DATA.sub("[IMAGE-DATA]", content)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        # Recipe illustrations are rendered from data URIs
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; img-src 'self' data:; frame-ancestors 'none'"
        )
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request, with sensitive values scrubbed."""

    async def dispatch(self, request: Request, call_next):
        target = request.url.path
        if request.query_params:
            target += f"?{request.query_params}"
        target = scrub_sensitive_data(target)

        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            f"{request.method} {target} -> {response.status_code} "
            f"({elapsed_ms:.0f} ms)"
        )
        return response
