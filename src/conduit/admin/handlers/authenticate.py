"""POST /admin/login

Checks the submitted email and password against the user store and starts a
session. Failures go back to the login form with a flash error.
"""

import asyncio
from urllib.parse import quote

from loguru import logger

from conduit.admin.utils import redirect_with_session, safe_return_path
from conduit.auth import verify_password
from conduit.constants import DASHBOARD_PATH, LOGIN_PATH
from conduit.router import RedirectError, RequestContext
from conduit.session import SessionService, create_session_cookie, get_session_id_from_request
from conduit.users import UserStore


async def handler(ctx: RequestContext):
    form = await ctx.request.form()
    email = str(form.get("email") or "").strip()
    password = str(form.get("password") or "")
    return_to = safe_return_path(form.get("return"))

    sessions: SessionService = ctx.services.get(SessionService)
    users: UserStore = ctx.services.get(UserStore)
    session_id = get_session_id_from_request(ctx.request)
    login_url = f"{LOGIN_PATH}?return={quote(return_to, safe='')}" if return_to else LOGIN_PATH

    if not email or not password:
        raise redirect_with_session(login_url, await sessions.set_flash_error(session_id, "Email and password are required"))

    user = await users.find_by_email(email)
    if user is None or not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info(f"Failed login attempt for {email}")
        raise redirect_with_session(login_url, await sessions.set_flash_error(session_id, "Invalid email or password"))

    if session_id is not None:
        await sessions.delete_session(session_id)

    session = await sessions.create_session(user.id)
    logger.info(f"User {user.id} logged in")
    raise RedirectError(return_to or DASHBOARD_PATH, headers={"Set-Cookie": create_session_cookie(session)})
