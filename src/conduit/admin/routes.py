"""Admin area routes.

Handlers live in ``conduit.admin.handlers`` and are imported on first use.
"""

from conduit.auth import redirect_if_auth, require_auth
from conduit.middleware import flash_middleware, with_layout
from conduit.router import RouteGroup, lazy

ADMIN_LAYOUT = "admin/layout.html"


def admin_routes(group: RouteGroup) -> None:
    """Register the admin pages on a group (mounted at ``/admin``)."""
    group.use(with_layout(ADMIN_LAYOUT))
    group.use(flash_middleware())

    group.get("/login", lazy("conduit.admin.handlers.login"), [redirect_if_auth()])
    group.post("/login", lazy("conduit.admin.handlers.authenticate"))

    # require_auth ships with the handler bundle
    group.post("/logout", lazy("conduit.admin.handlers.logout"))

    group.get("/dashboard", lazy("conduit.admin.handlers.dashboard"), [require_auth()])

    group.get("/register", lazy("conduit.admin.handlers.register"), [redirect_if_auth()])
    group.post("/register", lazy("conduit.admin.handlers.process_registration"))
