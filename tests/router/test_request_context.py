"""Tests for request-scoped context propagation."""

import asyncio

import pytest

from conduit.router import RequestContext, RequestContextError, get_request_context, run_with_context


class TestRequestContext:
    def test_fields(self, make_request):
        ctx = RequestContext(make_request("GET", "/posts", query_string="page=2"), params={"id": "1"}, services="registry", tenant="acme")

        assert ctx.params == {"id": "1"}
        assert ctx.query["page"] == "2"
        assert ctx.url.path == "/posts"
        assert ctx.services == "registry"
        assert ctx.session is None
        assert ctx.flash is None
        assert ctx.layout is None
        assert ctx.tenant == "acme"

    def test_access_outside_request_fails(self):
        with pytest.raises(RequestContextError):
            get_request_context()

    @pytest.mark.asyncio
    async def test_run_with_context_binds_and_restores(self, make_request):
        ctx = RequestContext(make_request())

        async def inside():
            await asyncio.sleep(0)
            return get_request_context()

        assert await run_with_context(ctx, inside) is ctx

        with pytest.raises(RequestContextError):
            get_request_context()

    @pytest.mark.asyncio
    async def test_binding_restored_after_error(self, make_request):
        async def failing():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await run_with_context(RequestContext(make_request()), failing)

        with pytest.raises(RequestContextError):
            get_request_context()

    @pytest.mark.asyncio
    async def test_concurrent_requests_are_isolated(self, make_request):
        async def handle(path: str):
            ctx = RequestContext(make_request("GET", path))

            async def work():
                await asyncio.sleep(0.01)
                return get_request_context().url.path

            return await run_with_context(ctx, work)

        results = await asyncio.gather(handle("/a"), handle("/b"), handle("/c"))

        assert results == ["/a", "/b", "/c"]

    @pytest.mark.asyncio
    async def test_context_visible_in_spawned_tasks(self, make_request):
        ctx = RequestContext(make_request())

        async def child():
            return get_request_context()

        async def parent():
            return await asyncio.gather(child(), child())

        assert await run_with_context(ctx, parent) == [ctx, ctx]

    @pytest.mark.asyncio
    async def test_sync_callable(self, make_request):
        ctx = RequestContext(make_request())

        assert await run_with_context(ctx, lambda: get_request_context() is ctx) is True
