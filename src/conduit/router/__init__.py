"""HTTP routing with middleware chains and request-scoped context."""

from .chain import CallNext, Middleware, RouteHandler, execute_middleware_chain
from .context import RequestContext, RequestContextError, get_request_context, run_with_context
from .errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    HttpError,
    InternalServerError,
    NotFoundError,
    RedirectError,
    TooManyRequestsError,
    UnauthorizedError,
    ValidationError,
    error_to_response,
)
from .responses import json_response, no_content, redirect
from .router import RouteGroup, Router
from .routes import HandlerBundle, HandlerResolutionError, LazyHandler, Route, compile_pattern, lazy

__all__ = [
    "BadRequestError",
    "CallNext",
    "ConflictError",
    "ForbiddenError",
    "HandlerBundle",
    "HandlerResolutionError",
    "HttpError",
    "InternalServerError",
    "LazyHandler",
    "Middleware",
    "NotFoundError",
    "RedirectError",
    "RequestContext",
    "RequestContextError",
    "Route",
    "RouteGroup",
    "RouteHandler",
    "Router",
    "TooManyRequestsError",
    "UnauthorizedError",
    "ValidationError",
    "compile_pattern",
    "error_to_response",
    "execute_middleware_chain",
    "get_request_context",
    "json_response",
    "lazy",
    "no_content",
    "redirect",
]
