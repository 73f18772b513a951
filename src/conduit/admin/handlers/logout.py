"""POST /admin/logout

Exported as a bundle so the auth requirement travels with the handler.
"""

from conduit.auth import require_auth
from conduit.constants import LOGIN_PATH
from conduit.router import HandlerBundle, RedirectError, RequestContext
from conduit.session import SessionService, create_logout_cookie


async def logout(ctx: RequestContext):
    await ctx.services.get(SessionService).delete_session(ctx.session.id)
    raise RedirectError(LOGIN_PATH, headers={"Set-Cookie": create_logout_cookie()})


handler = HandlerBundle(handler=logout, middleware=(require_auth(),))
