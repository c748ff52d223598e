"""
Lunchbox API - Security Headers Middleware.

Adds security headers to every response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from settings import settings

# JSON-only API: nothing may be framed, sniffed or loaded from it
STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Pragma": "no-cache",
}


def _is_authenticated(request: Request) -> bool:
    return bool(
        request.headers.get("Authorization")
        or request.cookies.get(settings.SESSION_COOKIE_NAME)
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to all responses.

    HSTS is only sent in production. Requests carrying a bearer token or the
    session cookie get no-store caching, since plans and profiles are
    per-user.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if settings.ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        response.headers.update(STATIC_HEADERS)
        if _is_authenticated(request):
            response.headers.update(NO_STORE_HEADERS)

        return response
