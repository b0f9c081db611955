"""
Security middleware evaluated on every request.

The chain runs three checks in order:

1. public-path allowlist: matching requests pass through untouched;
2. session check: the session cookie must carry a valid signed token;
3. role check: the token's roles must include the role required for the
   path prefix, if any.

Requests that pass get ``request.state.username`` and ``request.state.roles``.
"""

from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from todo_app.config import settings
from todo_app.utils.auth import decode_access_token
from todo_app.utils.logger import setup_logger

logger = setup_logger("security")

LOGIN_PATH = "/login"


def path_matches(path: str, pattern: str) -> bool:
    """Match ``path`` against an exact pattern or a ``/prefix/**`` subtree pattern."""
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


def is_public_path(path: str, public_paths: list[str]) -> bool:
    return any(path_matches(path, pattern) for pattern in public_paths)


def required_role(path: str, role_rules: dict[str, str]) -> str | None:
    """Role required for ``path``; the longest matching prefix wins."""
    matches = [
        prefix
        for prefix in role_rules
        if path == prefix or path.startswith(prefix.rstrip("/") + "/")
    ]
    if not matches:
        return None
    return role_rules[max(matches, key=len)]


class SecurityMiddleware(BaseHTTPMiddleware):
    """Allowlist, session and role checks in front of every route."""

    def __init__(
        self,
        app: ASGIApp,
        public_paths: list[str] | None = None,
        role_rules: dict[str, str] | None = None,
        cookie_name: str | None = None,
    ) -> None:
        super().__init__(app)
        self.public_paths = (
            public_paths if public_paths is not None else settings.public_paths
        )
        self.role_rules = role_rules if role_rules is not None else settings.role_rules
        self.cookie_name = cookie_name or settings.session_cookie_name

    def _unauthenticated(self, request: Request) -> Response:
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Authentication required"},
            )
        return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path

        if is_public_path(path, self.public_paths):
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        payload = decode_access_token(token) if token else None
        if not payload or not payload.get("sub"):
            logger.debug(f"Rejected anonymous request: {request.method} {path}")
            return self._unauthenticated(request)

        roles = payload.get("roles") or []
        needed = required_role(path, self.role_rules)
        if needed and needed not in roles:
            logger.warning(
                f"User '{payload['sub']}' lacks role {needed} for {request.method} {path}"
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"detail": "Access denied"},
            )

        request.state.username = payload["sub"]
        request.state.roles = roles
        return await call_next(request)
