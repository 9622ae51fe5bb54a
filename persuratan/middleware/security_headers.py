"""Security headers middleware."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from persuratan.core.config import settings

DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


def build_csp(debug: bool) -> str:
    directives = [
        "default-src 'self'",
        "style-src 'self' 'unsafe-inline'",
        "img-src 'self' data: blob:",
        "font-src 'self'",
        "connect-src 'self'",
        "object-src 'none'",
        "base-uri 'self'",
        "form-action 'self'",
        "frame-ancestors 'none'",
    ]
    if debug:
        directives.insert(1, "script-src 'self' 'unsafe-inline' 'unsafe-eval'")
    else:
        directives.insert(1, "script-src 'self'")
        directives.append("upgrade-insecure-requests")
    return "; ".join(directives)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"

        # Force HTTPS in production
        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        # Swagger UI butuh inline script dari CDN
        if not request.url.path.startswith(DOCS_PATHS):
            response.headers["Content-Security-Policy"] = build_csp(settings.DEBUG)

        if "X-Powered-By" in response.headers:
            del response.headers["X-Powered-By"]

        return response


def add_security_headers(app):
    """Add security headers middleware to the application."""
    app.add_middleware(SecurityHeadersMiddleware)
