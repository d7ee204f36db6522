"""
Access Gate: per-request allow/redirect decision.

Every request is classified on its own from the path and the session cookie.
The gate checks only that session evidence is present and well formed;
whether the session is genuine is decided later by the session provider.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import urlencode

from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from taskify.core.config import Settings, settings

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """How a request was classified."""
    PUBLIC = "public"
    AUTHENTICATED_ON_AUTH_PAGE = "authenticated_on_auth_page"
    UNAUTHENTICATED_ON_PROTECTED_ROUTE = "unauthenticated_on_protected_route"
    ALLOWED = "allowed"


class GateAction(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GateDecision:
    state: GateState
    action: GateAction
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.action is GateAction.ALLOW


def has_session_evidence(session_token: Optional[str]) -> bool:
    """Presence/format check only: non-empty and free of whitespace."""
    if not session_token:
        return False
    token = session_token.strip()
    return bool(token) and not any(ch.isspace() for ch in token)


def matches_prefix(path: str, prefixes: Iterable[str]) -> bool:
    """Match whole path segments, so /sign-in covers /sign-in/x but not /sign-inx."""
    for prefix in prefixes:
        base = prefix.rstrip("/")
        if path in (prefix, base) or path.startswith(base + "/"):
            return True
    return False


def sign_in_redirect(path: str, config: Settings) -> str:
    query = urlencode({config.callback_param: path}, safe="/")
    return f"{config.sign_in_path}?{query}"


def evaluate_request(
    path: str,
    session_token: Optional[str],
    config: Settings = settings,
) -> GateDecision:
    """
    Classify one request.

    - asset prefixes and public routes pass through unchanged
    - sign-in/sign-up with session evidence redirect to the home route
    - any other route without session evidence redirects to sign-in with the
      requested path attached as callback
    - everything else is allowed

    Never raises.
    """
    path = path or "/"

    if matches_prefix(path, config.ungated_prefixes):
        return GateDecision(GateState.PUBLIC, GateAction.ALLOW)

    authenticated = has_session_evidence(session_token)

    if authenticated and path in (config.sign_in_path, config.sign_up_path):
        return GateDecision(
            GateState.AUTHENTICATED_ON_AUTH_PAGE,
            GateAction.REDIRECT,
            config.home_path,
        )

    if matches_prefix(path, config.public_routes):
        return GateDecision(GateState.PUBLIC, GateAction.ALLOW)

    if not authenticated:
        return GateDecision(
            GateState.UNAUTHENTICATED_ON_PROTECTED_ROUTE,
            GateAction.REDIRECT,
            sign_in_redirect(path, config),
        )

    return GateDecision(GateState.ALLOWED, GateAction.ALLOW)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Runs evaluate_request before any route handler."""

    def __init__(self, app, config: Optional[Settings] = None):
        super().__init__(app)
        self.config = config or settings

    async def dispatch(self, request: Request, call_next):
        token = request.cookies.get(self.config.session_cookie_name)
        decision = evaluate_request(request.url.path, token, self.config)

        if not decision.allowed:
            logger.debug(f"{request.method} {request.url.path} -> {decision.state.value}, redirecting to {decision.location}")
            return RedirectResponse(url=decision.location, status_code=307)

        return await call_next(request)
