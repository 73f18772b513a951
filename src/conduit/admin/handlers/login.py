"""GET /admin/login"""

from conduit.admin.utils import safe_return_path
from conduit.router import RequestContext
from conduit.ui import render


async def handler(ctx: RequestContext):
    return render("admin/login.html", {"return_to": safe_return_path(ctx.query.get("return"))})
