"""GET /admin/register"""

from conduit.constants import MIN_PASSWORD_LENGTH
from conduit.router import RequestContext
from conduit.ui import render


async def handler(ctx: RequestContext):
    return render("admin/register.html", {"min_password_length": MIN_PASSWORD_LENGTH})
