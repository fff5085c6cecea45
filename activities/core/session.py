"""
Session cookies and route gating for the server-rendered pages
"""

import logging
from typing import Callable, Optional

from fastapi import HTTPException
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from activities.config import settings
from activities.database.supabase_client import get_auth_supabase
from activities.modules.auth.schemas import TokenResponse
from activities.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

UNGATED_PREFIXES = ("/api/", "/health", "/ready", "/docs", "/redoc", "/openapi.json")
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
HOME_PATH = "/"


def set_session_cookies(response: Response, tokens: TokenResponse) -> None:
    response.set_cookie(
        settings.access_token_cookie,
        tokens.access_token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    if tokens.refresh_token:
        response.set_cookie(
            settings.refresh_token_cookie,
            tokens.refresh_token,
            max_age=settings.cookie_max_age,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(settings.access_token_cookie)
    response.delete_cookie(settings.refresh_token_cookie)


def is_gated(path: str) -> bool:
    return not any(path == p.rstrip("/") or path.startswith(p) for p in UNGATED_PREFIXES)


def redirect_target(path: str, authenticated: bool) -> Optional[str]:
    """Where a page request must go instead, or None to let it through"""
    if not authenticated and not path.startswith(LOGIN_PATH) and not path.startswith(REGISTER_PATH):
        return LOGIN_PATH
    if authenticated and path in (LOGIN_PATH, REGISTER_PATH):
        return HOME_PATH
    return None


def _default_auth_service() -> AuthService:
    return AuthService(get_auth_supabase())


class SessionMiddleware:
    """Resolve the session user for page routes, refresh expired sessions and apply redirect rules."""

    def __init__(self, app, auth_service_factory: Optional[Callable[[], AuthService]] = None):
        self.app = app
        self.auth_service_factory = auth_service_factory or _default_auth_service

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not is_gated(scope["path"]):
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        auth_service = self.auth_service_factory()
        access_token = request.cookies.get(settings.access_token_cookie)
        user = auth_service.resolve_user(access_token)

        refreshed: Optional[TokenResponse] = None
        refresh_token = request.cookies.get(settings.refresh_token_cookie)
        if user is None and refresh_token:
            try:
                refreshed = auth_service.refresh_session(refresh_token)
                access_token = refreshed.access_token
                user = auth_service.resolve_user(access_token)
                logger.debug(f"Refreshed session for user {refreshed.user_id}")
            except HTTPException:
                refreshed = None

        target = redirect_target(scope["path"], user is not None)
        if target is not None:
            response = RedirectResponse(url=target, status_code=303)
            if refreshed is not None and user is not None:
                set_session_cookies(response, refreshed)
            await response(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state["user"] = user
        state["access_token"] = access_token if user is not None else None

        if refreshed is None:
            await self.app(scope, receive, send)
            return

        cookie_carrier = Response()
        set_session_cookies(cookie_carrier, refreshed)
        cookie_headers = [(k, v) for k, v in cookie_carrier.raw_headers if k == b"set-cookie"]

        async def send_with_cookies(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"] = list(message["headers"]) + cookie_headers
            await send(message)

        await self.app(scope, receive, send_with_cookies)
