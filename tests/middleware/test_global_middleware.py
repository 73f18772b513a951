"""Tests for the reusable middleware."""

import pytest
from fastapi.responses import PlainTextResponse

from conduit.middleware import cors, flash_middleware, logging_middleware, simple_logger, static_files, with_layout
from conduit.router import Router, get_request_context, json_response
from conduit.session import MemorySessionStore, SessionService


def ok(ctx):
    return PlainTextResponse("ok")


class TestCors:
    @pytest.mark.asyncio
    async def test_preflight_short_circuits(self, make_request):
        calls: list[str] = []

        def handler(ctx):
            calls.append("handler")
            return PlainTextResponse("ok")

        router = Router().use(cors()).get("/api", handler)

        response = await router.handle(make_request("OPTIONS", "/api", headers={"Origin": "https://example.com"}))

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-max-age"] == "86400"
        assert calls == []

    @pytest.mark.asyncio
    async def test_headers_added_to_responses(self, make_request):
        router = Router().use(cors(credentials=True, exposed_headers=["X-Total"])).get("/api", ok)

        response = await router.handle(make_request("GET", "/api"))

        assert response.headers["access-control-allow-methods"] == "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"
        assert response.headers["access-control-expose-headers"] == "X-Total"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_origin_list(self, make_request):
        router = Router().use(cors(origin=["https://allowed.example"])).get("/api", ok)

        allowed = await router.handle(make_request("GET", "/api", headers={"Origin": "https://allowed.example"}))
        denied = await router.handle(make_request("GET", "/api", headers={"Origin": "https://evil.example"}))

        assert allowed.headers["access-control-allow-origin"] == "https://allowed.example"
        assert allowed.headers["vary"] == "Origin"
        assert "access-control-allow-origin" not in denied.headers

    @pytest.mark.asyncio
    async def test_headers_on_not_found(self, make_request):
        router = Router().use(cors())

        response = await router.handle(make_request("GET", "/missing"))

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "*"


class TestLogging:
    @pytest.mark.asyncio
    async def test_simple_logger_passes_response_through(self, make_request):
        router = Router().use(simple_logger()).get("/", ok)

        response = await router.handle(make_request("GET", "/", query_string="a=1"))

        assert response.body == b"ok"

    @pytest.mark.asyncio
    async def test_logging_middleware_with_bodies(self, make_request):
        router = Router().use(logging_middleware(log_bodies=True)).post("/echo", lambda ctx: json_response({"ok": True}))

        response = await router.handle(make_request("POST", "/echo", body=b'{"x": 1}'))

        assert response.status_code == 200


class TestWithLayout:
    @pytest.mark.asyncio
    async def test_sets_layout(self, make_request):
        router = Router().get("/", lambda ctx: PlainTextResponse(get_request_context().layout), [with_layout("admin/layout.html")])

        response = await router.handle(make_request())

        assert response.body == b"admin/layout.html"


class TestFlashMiddleware:
    @pytest.mark.asyncio
    async def test_loads_and_clears_flash(self, make_request):
        sessions = SessionService(MemorySessionStore())
        session = await sessions.set_flash_success(None, "Welcome")
        router = Router().get(
            "/",
            lambda ctx: PlainTextResponse(ctx.flash.success if ctx.flash else "none"),
            [flash_middleware(sessions)],
        )
        headers = {"Cookie": f"session={session.id}"}

        first = await router.handle(make_request(headers=headers))
        second = await router.handle(make_request(headers=headers))

        assert first.body == b"Welcome"
        assert second.body == b"none"

    @pytest.mark.asyncio
    async def test_without_cookie(self, make_request):
        router = Router().get("/", lambda ctx: PlainTextResponse(str(ctx.flash)), [flash_middleware(SessionService(MemorySessionStore()))])

        response = await router.handle(make_request())

        assert response.body == b"None"


class TestStaticFilesMiddleware:
    @pytest.fixture
    def public_dir(self, tmp_path):
        (tmp_path / "index.html").write_text("<html>app</html>")
        (tmp_path / "style.css").write_text("body {}")
        return tmp_path

    @pytest.mark.asyncio
    async def test_serves_file(self, make_request, public_dir):
        router = Router().use(static_files(public_dir))

        response = await router.handle(make_request("GET", "/style.css"))

        assert response.status_code == 200
        assert response.media_type == "text/css"

    @pytest.mark.asyncio
    async def test_spa_fallback(self, make_request, public_dir):
        router = Router().use(static_files(public_dir))

        response = await router.handle(make_request("GET", "/some/client/route"))

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-cache"

    @pytest.mark.asyncio
    async def test_excluded_paths_reach_routes(self, make_request, public_dir):
        router = Router().use(static_files(public_dir, exclude=["/api/*"])).get("/api/info", lambda ctx: json_response({"api": True}))

        response = await router.handle(make_request("GET", "/api/info"))

        assert response.media_type == "application/json"

    @pytest.mark.asyncio
    async def test_without_spa_falls_through(self, make_request, public_dir):
        router = Router().use(static_files(public_dir, spa=False))

        response = await router.handle(make_request("GET", "/missing"))

        assert response.status_code == 404
