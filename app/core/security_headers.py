"""Response header middleware: security headers and HTTP caching policy."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.config import get_settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security and Cache-Control headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        settings = get_settings()

        # Read endpoints may be cached by clients and CDNs for a short while
        if "Cache-Control" not in response.headers:
            cacheable = (
                request.method == "GET"
                and response.status_code == 200
                and settings.http_cache_seconds > 0
            )
            if cacheable:
                response.headers["Cache-Control"] = f"public, max-age={settings.http_cache_seconds}"
            else:
                response.headers["Cache-Control"] = "no-store, max-age=0"

        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
