"""
Tests for the per-request Access Gate, both the pure classifier and the
middleware wired into the app.
"""
import pytest
from httpx import AsyncClient

from taskify.core.access_gate import (
    GateAction,
    GateState,
    evaluate_request,
    has_session_evidence,
    matches_prefix,
)
from taskify.core.config import Settings, settings

TOKEN = "abc123.signature"


class TestEvaluateRequest:

    def test_public_route_without_session_allowed(self):
        decision = evaluate_request("/sign-in", None)

        assert decision.state is GateState.PUBLIC
        assert decision.action is GateAction.ALLOW
        assert decision.location is None

    def test_protected_route_without_session_redirects_with_callback(self):
        decision = evaluate_request("/", None)

        assert decision.state is GateState.UNAUTHENTICATED_ON_PROTECTED_ROUTE
        assert decision.location == "/sign-in?callbackUrl=/"

    def test_nested_path_kept_in_callback(self):
        decision = evaluate_request("/projects/p1", None)

        assert decision.location == "/sign-in?callbackUrl=/projects/p1"

    @pytest.mark.parametrize("path", ["/sign-in", "/sign-up"])
    def test_auth_pages_with_session_redirect_home(self, path):
        decision = evaluate_request(path, TOKEN)

        assert decision.state is GateState.AUTHENTICATED_ON_AUTH_PAGE
        assert decision.action is GateAction.REDIRECT
        assert decision.location == "/"

    def test_auth_callbacks_stay_public_with_session(self):
        decision = evaluate_request("/api/auth/callback/github", TOKEN)

        assert decision.state is GateState.PUBLIC

    def test_protected_route_with_session_allowed(self):
        decision = evaluate_request("/api/projects", TOKEN)

        assert decision.state is GateState.ALLOWED
        assert decision.allowed

    def test_prefix_must_match_whole_segment(self):
        decision = evaluate_request("/sign-inx", None)

        assert decision.state is GateState.UNAUTHENTICATED_ON_PROTECTED_ROUTE

    def test_static_assets_never_gated(self):
        assert evaluate_request("/static/app.css", None).allowed
        assert evaluate_request("/favicon.ico", None).allowed

    @pytest.mark.parametrize("token", ["", "   ", "abc def"])
    def test_malformed_token_is_no_session(self, token):
        decision = evaluate_request("/", token)

        assert decision.state is GateState.UNAUTHENTICATED_ON_PROTECTED_ROUTE

    def test_custom_configuration(self):
        config = Settings(
            public_routes=["/login"],
            sign_in_path="/login",
            home_path="/dashboard",
            callback_param="next",
        )

        assert evaluate_request("/reports", None, config).location == "/login?next=/reports"
        assert evaluate_request("/login", TOKEN, config).location == "/dashboard"

    def test_helpers(self):
        assert has_session_evidence(TOKEN)
        assert not has_session_evidence(None)
        assert matches_prefix("/api/auth", ["/api/auth/"])
        assert not matches_prefix("/api/authz", ["/api/auth"])


class TestAccessGateMiddleware:

    @pytest.mark.asyncio
    async def test_unauthenticated_request_redirected(self, client: AsyncClient):
        response = await client.get("/api/projects")

        assert response.status_code == 307
        assert response.headers["location"] == "/sign-in?callbackUrl=/api/projects"

    @pytest.mark.asyncio
    async def test_authenticated_user_bounced_from_sign_in(self, client: AsyncClient):
        client.cookies.set(settings.session_cookie_name, TOKEN)

        response = await client.get("/sign-in")

        assert response.status_code == 307
        assert response.headers["location"] == "/"

    @pytest.mark.asyncio
    async def test_public_route_passes_through(self, client: AsyncClient):
        response = await client.get("/sign-in")

        # No handler is mounted for the page itself, the gate just lets it by
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_health_is_public(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_unknown_token_passes_gate_but_fails_lookup(self, client: AsyncClient, statuses):
        client.cookies.set(settings.session_cookie_name, "forged.token")

        response = await client.get("/api/projects")

        assert response.status_code == 401
