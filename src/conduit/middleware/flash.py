"""Flash message middleware."""

from fastapi.responses import Response

from conduit.router import CallNext, Middleware, RequestContext
from conduit.session import SessionService, get_session_id_from_request


def flash_middleware(sessions: SessionService | None = None) -> Middleware:
    """Load (and thereby clear) the session's flash messages into ``ctx.flash``."""

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        session_id = get_session_id_from_request(ctx.request)
        if session_id is not None:
            service = sessions if sessions is not None else ctx.services.get(SessionService)
            ctx.flash = await service.get_flash(session_id)

        return await call_next()

    return middleware
