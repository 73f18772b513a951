"""Route definitions, pattern compilation and lazy handlers."""

import importlib
import inspect
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from loguru import logger

from conduit.exceptions import ConfigurationError

from .chain import Middleware, RouteHandler

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

_PARAM_PATTERN = re.compile(r":(\w+)")


class HandlerResolutionError(ConfigurationError):
    """Raised when a lazy handler does not resolve to something the router can call."""


@dataclass(frozen=True)
class HandlerBundle:
    """A handler exported together with middleware that only applies to it.

    Bundle middleware runs innermost, right next to the handler.
    """

    handler: RouteHandler
    middleware: Sequence[Middleware] = field(default_factory=tuple)


class ResolvedHandler(NamedTuple):
    handler: RouteHandler
    middleware: tuple[Middleware, ...]


def _normalize(target: Any, name: str) -> ResolvedHandler:
    handler = getattr(target, "handler", None)
    if handler is not None and callable(handler):
        return ResolvedHandler(handler, tuple(getattr(target, "middleware", None) or ()))

    if callable(target):
        return ResolvedHandler(target, ())

    raise HandlerResolutionError(f"Handler {name} must be a callable or an object with a handler attribute, got {type(target).__name__}")


class LazyHandler:
    """Handler loaded on first use.

    ``loader`` returns (or asynchronously returns) either a callable or an
    object with a ``handler`` attribute and optional ``middleware``. The
    result is cached, so the loader runs at most once per successful
    resolution.
    """

    def __init__(self, loader: Callable[[], Any], name: str | None = None):
        self._loader = loader
        self.name = name or getattr(loader, "__qualname__", repr(loader))
        self._resolved: ResolvedHandler | None = None

    @property
    def is_resolved(self) -> bool:
        return self._resolved is not None

    async def resolve(self) -> ResolvedHandler:
        if self._resolved is None:
            target = self._loader()
            if inspect.isawaitable(target):
                target = await target
            self._resolved = _normalize(target, self.name)
            logger.debug(f"Resolved lazy handler {self.name}")
        return self._resolved

    def __repr__(self) -> str:
        return f"LazyHandler({self.name!r})"


def lazy(target: str) -> LazyHandler:
    """Reference a handler by import path without importing it yet.

    ``"conduit.admin.handlers.login"`` loads the module's ``handler``
    attribute; ``"package.module:attr"`` names the attribute explicitly.
    """
    module_name, _, attr = target.partition(":")
    attr = attr or "handler"

    def load() -> Any:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise HandlerResolutionError(f"Cannot import handler module {module_name}: {e}") from e

        try:
            return getattr(module, attr)
        except AttributeError as e:
            raise HandlerResolutionError(f"Handler module {module_name} has no attribute {attr}") from e

    return LazyHandler(load, name=f"{module_name}:{attr}")


def compile_pattern(pattern: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    """Compile a route pattern into an anchored regex and its parameter names.

    Literal text is matched exactly; ``:name`` matches one non-empty path
    segment. ``/posts/:id`` compiles to ``^/posts/([^/]+)$`` with ``("id",)``.
    """
    parts: list[str] = []
    param_names: list[str] = []
    position = 0

    for match in _PARAM_PATTERN.finditer(pattern):
        parts.append(re.escape(pattern[position : match.start()]))
        parts.append("([^/]+)")
        param_names.append(match.group(1))
        position = match.end()
    parts.append(re.escape(pattern[position:]))

    return re.compile(f"^{''.join(parts)}$"), tuple(param_names)


@dataclass(frozen=True)
class Route:
    """A registered route. The matcher is compiled once, at registration."""

    method: str
    pattern: str
    handler: RouteHandler | LazyHandler
    middleware: tuple[Middleware, ...]
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    @classmethod
    def create(cls, method: str, pattern: str, handler: RouteHandler | LazyHandler, middleware: Sequence[Middleware] = ()) -> "Route":
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ConfigurationError(f"Unsupported HTTP method: {method}")
        if not isinstance(handler, LazyHandler) and not callable(handler):
            raise ConfigurationError(f"Handler for {method} {pattern} must be callable or a LazyHandler")

        regex, param_names = compile_pattern(pattern)
        return cls(method, pattern, handler, tuple(middleware), regex, param_names)

    def match(self, method: str, path: str) -> dict[str, str] | None:
        """Return the path parameters if this route handles the request, else None."""
        if method != self.method:
            return None

        match = self.regex.match(path)
        if match is None:
            return None
        return dict(zip(self.param_names, match.groups(), strict=True))

    async def resolve(self) -> ResolvedHandler:
        if isinstance(self.handler, LazyHandler):
            return await self.handler.resolve()
        return ResolvedHandler(self.handler, ())
