"""POST /admin/register

Validates the form and emits ``user.registered``. The user record itself is
written by ``UserListener``; this handler never touches the user store except
for the duplicate check, which runs before the event is emitted.
"""

import asyncio

from loguru import logger

from conduit.admin.utils import redirect_with_session
from conduit.auth import hash_password
from conduit.constants import LOGIN_PATH, MIN_PASSWORD_LENGTH, REGISTER_PATH
from conduit.events import EventStore, UserRegisteredData, UserRegisteredEvent
from conduit.router import RequestContext
from conduit.session import SessionService, get_session_id_from_request
from conduit.users import UserStore, normalize_email
from conduit.utils import generate_user_id, now_ms


def validate_registration(email: str, password: str, password_confirm: str) -> dict[str, list[str]]:
    """Return messages per field; empty when the form is valid."""
    errors: dict[str, list[str]] = {}

    if "@" not in email or email.startswith("@") or email.endswith("@"):
        errors["email"] = ["Enter a valid email address"]
    if len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]
    if password != password_confirm:
        errors["password_confirm"] = ["Passwords do not match"]

    return errors


async def handler(ctx: RequestContext):
    form = await ctx.request.form()
    email = normalize_email(str(form.get("email") or ""))
    password = str(form.get("password") or "")
    password_confirm = str(form.get("password_confirm") or "")

    sessions: SessionService = ctx.services.get(SessionService)
    session_id = get_session_id_from_request(ctx.request)

    if not email or not password or not password_confirm:
        raise redirect_with_session(REGISTER_PATH, await sessions.set_flash_error(session_id, "All fields are required"))

    errors = validate_registration(email, password, password_confirm)
    if not errors and await ctx.services.get(UserStore).exists(email):
        errors["email"] = ["Email already registered"]

    if errors:
        logger.debug(f"Registration rejected for {email}: {errors}")
        raise redirect_with_session(REGISTER_PATH, await sessions.set_flash_errors(session_id, errors))

    # scrypt is CPU-bound; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, password)
    event = UserRegisteredEvent(
        data=UserRegisteredData(user_id=generate_user_id(), email=email, password_hash=password_hash, created_at=now_ms())
    )
    await ctx.services.get(EventStore).emit(event)

    raise redirect_with_session(LOGIN_PATH, await sessions.set_flash_success(session_id, "Account created successfully! Please log in."))
