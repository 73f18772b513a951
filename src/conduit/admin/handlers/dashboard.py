"""GET /admin/dashboard (requires auth)"""

from conduit.router import RequestContext
from conduit.ui import render
from conduit.users import UserStore


async def handler(ctx: RequestContext):
    user = await ctx.services.get(UserStore).find_by_id(ctx.session.user_id)
    return render("admin/dashboard.html", {"user": user})
