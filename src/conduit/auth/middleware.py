"""Authentication middleware.

Both middleware read the session through the ``SessionService`` registered
in ``ctx.services`` unless one is passed in explicitly.
"""

import inspect
from collections.abc import Awaitable, Callable
from urllib.parse import quote

from fastapi.responses import Response

from conduit.constants import DASHBOARD_PATH, LOGIN_PATH
from conduit.router import CallNext, Middleware, RedirectError, RequestContext
from conduit.session import SessionService


def _session_service(ctx: RequestContext, sessions: SessionService | None) -> SessionService:
    if sessions is not None:
        return sessions
    return ctx.services.get(SessionService)


def require_auth(
    login_path: str = LOGIN_PATH,
    on_unauthorized: Callable[[RequestContext], Response | Awaitable[Response]] | None = None,
    sessions: SessionService | None = None,
) -> Middleware:
    """Require a logged-in session.

    Without one the request is redirected to ``login_path`` with the
    original path in the ``return`` query parameter, unless
    ``on_unauthorized`` provides another response. With one, the session is
    stored on ``ctx.session``.

    Example:
        router.get("/admin/dashboard", dashboard, [require_auth()])
    """

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        session = await _session_service(ctx, sessions).get_session_from_request(ctx.request)

        if session is None or not session.is_authenticated:
            if on_unauthorized is not None:
                result = on_unauthorized(ctx)
                return await result if inspect.isawaitable(result) else result
            raise RedirectError(f"{login_path}?return={quote(ctx.url.path, safe='')}")

        ctx.session = session
        return await call_next()

    return middleware


def redirect_if_auth(redirect_to: str = DASHBOARD_PATH, sessions: SessionService | None = None) -> Middleware:
    """Send already logged-in users to ``redirect_to`` (used on the login page)."""

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        session = await _session_service(ctx, sessions).get_session_from_request(ctx.request)
        if session is not None and session.is_authenticated:
            raise RedirectError(redirect_to)
        return await call_next()

    return middleware
