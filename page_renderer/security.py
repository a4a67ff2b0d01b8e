"""CSRF token provider using the double-submit cookie pattern.

``CSRFMiddleware`` makes sure every HTTP request has a token: it reuses the
one in the signed cookie or issues a new one, and stores it on the
request state. ``get_csrf_token`` is what the view manager calls to read
it. Verifying submitted forms is left to the routes that accept them.
"""

import hashlib
import hmac
import secrets
from contextlib import suppress

from starlette.requests import HTTPConnection, Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from page_renderer.config import Settings, get_settings
from page_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

CSRF_COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days


def generate_csrf_token() -> str:
    """Generate a secure CSRF token (43 URL-safe characters)."""
    return secrets.token_urlsafe(32)


def sign_csrf_token(token: str, secret_key: str) -> str:
    """Sign a CSRF token with the secret key."""
    signature = hmac.new(secret_key.encode(), token.encode(), hashlib.sha256).hexdigest()
    return f"{token}.{signature}"


def verify_csrf_signature(signed_token: str, secret_key: str) -> str | None:
    """Verify CSRF token signature and return the token if valid."""
    with suppress(ValueError):
        token, signature = signed_token.rsplit(".", 1)
        expected_signature = hmac.new(secret_key.encode(), token.encode(), hashlib.sha256).hexdigest()
        if token and hmac.compare_digest(signature, expected_signature):
            return token
    return None


def get_csrf_token(request: HTTPConnection, settings: Settings | None = None) -> str:
    """Return the CSRF token for the current request.

    Args:
        request: Incoming request
        settings: Settings holding the cookie name and signing key

    Returns:
        Token set by CSRFMiddleware, else the verified cookie token, else ""
    """
    token = getattr(request.state, "csrf_token", None)
    if token:
        return token

    settings = settings or get_settings()
    signed_token = request.cookies.get(settings.csrf_cookie_name)
    if not signed_token:
        return ""
    return verify_csrf_signature(signed_token, settings.secret_key) or ""


class CSRFMiddleware:
    """ASGI middleware that issues the CSRF token and cookie.

    Requests with a valid signed cookie keep their token. Otherwise a new
    token is generated, stored on the request state, and its signed form
    is set as a cookie on the response.
    """

    def __init__(self, app: ASGIApp, settings: Settings | None = None):
        self.app = app
        self.settings = settings or get_settings()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        cookie_name = self.settings.csrf_cookie_name
        signed_cookie = request.cookies.get(cookie_name)
        token = verify_csrf_signature(signed_cookie, self.settings.secret_key) if signed_cookie else None
        issued = token is None
        if issued:
            token = generate_csrf_token()
            if signed_cookie:
                log_with_context(
                    logger,
                    "warning",
                    "Invalid CSRF cookie signature, issuing new token",
                    path=scope.get("path", ""),
                    event_type="csrf_cookie_invalid",
                )

        request.state.csrf_token = token

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start" and issued:
                cookie_value = (
                    f"{cookie_name}={sign_csrf_token(token, self.settings.secret_key)}; "
                    f"Path=/; SameSite=strict; Max-Age={CSRF_COOKIE_MAX_AGE}"
                )
                if self.settings.csrf_cookie_secure:
                    cookie_value += "; Secure"
                headers = list(message.get("headers", []))
                headers.append((b"set-cookie", cookie_value.encode()))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
