"""Request-scoped context.

The router binds one ``RequestContext`` per request with ``run_with_context``.
Anything running inside that request, however deeply nested, can then reach
it through ``get_request_context()`` without the context being passed along
explicitly. Concurrent requests each see their own context because the
binding is a ``ContextVar``, which asyncio copies into every task.
"""

import inspect
from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from typing import Any, TypeVar

from fastapi import Request


class RequestContextError(RuntimeError):
    """Raised when the request context is accessed outside of a request."""


class RequestContext:
    """Per-request mutable state shared by middleware and the handler.

    Middleware attach what later steps need (``session``, ``flash``,
    ``layout``). Extra keyword arguments become attributes, which is how
    applications add their own fields.
    """

    def __init__(self, request: Request, params: dict[str, str] | None = None, services: Any = None, **extensions: Any):
        self.request = request
        self.params: dict[str, str] = params or {}
        self.query = request.query_params
        self.url = request.url
        self.services = services
        self.session: Any = None
        self.flash: Any = None
        self.layout: str | None = None
        for name, value in extensions.items():
            setattr(self, name, value)

    def __repr__(self) -> str:
        return f"RequestContext(method={self.request.method!r}, path={self.url.path!r}, params={self.params!r})"


_current_context: ContextVar[RequestContext | None] = ContextVar("conduit_request_context", default=None)


def get_request_context() -> RequestContext:
    """Get the context of the request currently being handled.

    Raises:
        RequestContextError: If called outside of a request
    """
    ctx = _current_context.get()
    if ctx is None:
        raise RequestContextError("Request context not available. Are you calling this outside a request handler?")
    return ctx


T = TypeVar("T")


async def run_with_context(ctx: RequestContext, fn: Callable[[], Awaitable[T] | T]) -> T:
    """Run ``fn`` with ``ctx`` bound as the current request context.

    The previous binding is restored afterwards, even if ``fn`` raises.
    """
    token = _current_context.set(ctx)
    try:
        result = fn()
        if inspect.isawaitable(result):
            return await result
        return result
    finally:
        _current_context.reset(token)
