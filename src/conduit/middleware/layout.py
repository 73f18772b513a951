"""Layout selection middleware."""

from fastapi.responses import Response

from conduit.router import CallNext, Middleware, RequestContext


def with_layout(name: str) -> Middleware:
    """Render pages of the following handlers inside the layout template ``name``."""

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        ctx.layout = name
        return await call_next()

    return middleware
