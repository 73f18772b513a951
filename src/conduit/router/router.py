"""The Conduit router.

Routes are matched in registration order and the first match wins. Each
request runs through ``global + group + route + bundle`` middleware, outer
to inner, before reaching its handler. ``Router.handle`` never raises:
every failure becomes a response through ``error_to_response``.

Example:
    ```python
    router = Router(services=registry)
    router.use(simple_logger())
    router.get("/posts/:id", show_post)
    router.group("/admin", lambda group: group.get("/dashboard", lazy("app.dashboard")), [require_auth()])
    ```
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import Response
from loguru import logger
from starlette.types import Receive, Scope, Send

from conduit.utils.static import serve_static_file

from .chain import Middleware, RouteHandler, execute_middleware_chain
from .context import RequestContext, run_with_context
from .errors import HttpError, NotFoundError, RedirectError, error_to_response
from .routes import LazyHandler, Route

Handler = RouteHandler | LazyHandler


class Router:
    """HTTP router with middleware chains, lazy handlers and static files.

    The router is an ASGI application, so it can be served directly or
    mounted into a FastAPI app.
    """

    def __init__(self, services: Any = None, development: bool = False):
        """Initialize an empty router.

        Args:
            services: Service registry exposed to handlers as ``ctx.services``
            development: Include real messages and stack traces in 500 responses
        """
        self.services = services
        self.development = development
        self._routes: list[Route] = []
        self._middleware: list[Middleware] = []
        self._static_dir: Path | None = None

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration (matching) order."""
        return tuple(self._routes)

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Global middleware, outermost first."""
        return tuple(self._middleware)

    def use(self, middleware: Middleware) -> "Router":
        """Add global middleware. It runs for every request, matched or not."""
        self._middleware.append(middleware)
        return self

    def get(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        return self.add_route("GET", pattern, handler, middleware)

    def post(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        return self.add_route("POST", pattern, handler, middleware)

    def put(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        return self.add_route("PUT", pattern, handler, middleware)

    def patch(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        return self.add_route("PATCH", pattern, handler, middleware)

    def delete(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        return self.add_route("DELETE", pattern, handler, middleware)

    def add_route(self, method: str, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "Router":
        """Register a route for any supported HTTP method."""
        route = Route.create(method, pattern, handler, middleware or ())
        self._routes.append(route)
        logger.trace(f"Registered route {route.method} {route.pattern}")
        return self

    def group(self, prefix: str, callback: Callable[["RouteGroup"], Any], middleware: Sequence[Middleware] | None = None) -> "Router":
        """Register routes sharing a path prefix and middleware.

        Example:
            router.group("/admin", lambda group: group.get("/dashboard", dashboard), [require_auth()])
        """
        callback(RouteGroup(self, prefix, middleware or ()))
        return self

    def static(self, directory: str | Path) -> "Router":
        """Serve files from ``directory`` for GET and HEAD requests, ahead of route matching."""
        self._static_dir = Path(directory).resolve()
        logger.debug(f"Serving static files from {self._static_dir}")
        return self

    async def handle(self, request: Request) -> Response:
        """Handle one request and always return a response."""
        ctx = RequestContext(request, services=self.services)
        try:
            response = await run_with_context(ctx, lambda: self._dispatch(ctx))
        except Exception as e:
            self._log_failure(request, e)
            return error_to_response(e, development=self.development)

        if not isinstance(response, Response):
            error = TypeError(f"Handler for {request.method} {request.url.path} returned {type(response).__name__}, expected a Response")
            self._log_failure(request, error)
            return error_to_response(error, development=self.development)
        return response

    async def _dispatch(self, ctx: RequestContext) -> Response:
        method = ctx.request.method
        path = ctx.url.path

        if self._static_dir is not None and method in ("GET", "HEAD"):
            static_response = serve_static_file(self._static_dir, path)
            if static_response is not None:
                return await execute_middleware_chain(ctx, self._middleware, lambda _ctx: static_response)

        for route in self._routes:
            params = route.match(method, path)
            if params is None:
                continue

            ctx.params = params
            handler, bundle_middleware = await route.resolve()
            return await execute_middleware_chain(ctx, [*self._middleware, *route.middleware, *bundle_middleware], handler)

        not_found = NotFoundError(f"Route not found: {method} {path}")
        return await execute_middleware_chain(ctx, self._middleware, lambda _ctx: error_to_response(not_found))

    def _log_failure(self, request: Request, error: Exception) -> None:
        if isinstance(error, RedirectError):
            logger.trace(f"{request.method} {request.url.path} redirected to {error.location}")
        elif isinstance(error, HttpError) and error.status_code < 500:
            logger.debug(f"{request.method} {request.url.path} failed with {error.status_code}: {error.message}")
        else:
            logger.opt(exception=error).error(f"Unhandled error for {request.method} {request.url.path}: {error}")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            response = await self.handle(Request(scope, receive))
            await response(scope, receive, send)
        elif scope["type"] == "lifespan":
            while True:
                message = await receive()
                if message["type"] == "lifespan.startup":
                    await send({"type": "lifespan.startup.complete"})
                elif message["type"] == "lifespan.shutdown":
                    await send({"type": "lifespan.shutdown.complete"})
                    return
        else:
            await send({"type": "websocket.close", "code": 1000})


class RouteGroup:
    """Registers routes on a router under a common prefix.

    Middleware order for a group route is constructor middleware, then
    ``use()`` middleware, then per-route middleware; all of it runs after the
    router's global middleware.
    """

    def __init__(self, router: Router, prefix: str, middleware: Sequence[Middleware] = ()):
        self.router = router
        self.prefix = prefix
        self._middleware = list(middleware)
        self._group_middleware: list[Middleware] = []

    def use(self, middleware: Middleware) -> "RouteGroup":
        """Add middleware for every route registered on this group afterwards."""
        self._group_middleware.append(middleware)
        return self

    def get(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "RouteGroup":
        return self._route("GET", pattern, handler, middleware)

    def post(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "RouteGroup":
        return self._route("POST", pattern, handler, middleware)

    def put(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "RouteGroup":
        return self._route("PUT", pattern, handler, middleware)

    def patch(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "RouteGroup":
        return self._route("PATCH", pattern, handler, middleware)

    def delete(self, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None = None) -> "RouteGroup":
        return self._route("DELETE", pattern, handler, middleware)

    def _route(self, method: str, pattern: str, handler: Handler, middleware: Sequence[Middleware] | None) -> "RouteGroup":
        self.router.add_route(method, self.prefix + pattern, handler, [*self._middleware, *self._group_middleware, *(middleware or ())])
        return self
