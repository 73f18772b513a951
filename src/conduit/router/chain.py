"""Middleware chain execution.

A middleware is ``middleware(ctx, call_next)``. It may do work before and
after ``await call_next()``, or return its own response without calling it
to short-circuit the rest of the chain. Middleware and handlers may be plain
functions or coroutines.
"""

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from fastapi.responses import Response

from .context import RequestContext

CallNext = Callable[[], Awaitable[Response]]
Middleware = Callable[[RequestContext, CallNext], Response | Awaitable[Response]]
RouteHandler = Callable[[RequestContext], Response | Awaitable[Response]]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def execute_middleware_chain(ctx: RequestContext, middleware: Sequence[Middleware], handler: RouteHandler) -> Response:
    """Run ``middleware`` outer to inner, then ``handler``.

    Raises:
        RuntimeError: If a middleware calls ``call_next`` more than once
    """

    async def dispatch(index: int) -> Response:
        if index >= len(middleware):
            return await _maybe_await(handler(ctx))

        called = False

        def call_next() -> Awaitable[Response]:
            nonlocal called
            if called:
                raise RuntimeError(f"call_next() called multiple times by {getattr(middleware[index], '__name__', middleware[index])!r}")
            called = True
            return dispatch(index + 1)

        return await _maybe_await(middleware[index](ctx, call_next))

    return await dispatch(0)
