"""HTTP middleware: access logging and security headers."""
import logging
import time
from datetime import UTC, datetime

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

access_logger = logging.getLogger("api.access")


SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add hardening headers to every response unless already set."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add headers to response."""
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Emit one log line per request.

    Production uses a short line (method, path, status, size, latency);
    other environments use a Common Log Format style line.
    """

    def __init__(self, app: ASGIApp, concise: bool = False) -> None:
        super().__init__(app)
        self.concise = concise

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log the outcome."""
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, "-", start)
            raise
        self._log(request, response.status_code, response.headers.get("content-length", "-"), start)
        return response

    def _log(self, request: Request, status: int, length: str, start: float) -> None:
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        if self.concise:
            elapsed_ms = (time.perf_counter() - start) * 1000
            access_logger.info(
                "%s %s %s %s - %.3f ms", request.method, path, status, length, elapsed_ms,
            )
            return
        client = request.client.host if request.client else "-"
        timestamp = datetime.now(UTC).strftime("%d/%b/%Y:%H:%M:%S +0000")
        access_logger.info(
            '%s - - [%s] "%s %s HTTP/%s" %s %s',
            client,
            timestamp,
            request.method,
            path,
            request.scope.get("http_version", "1.1"),
            status,
            length,
        )
