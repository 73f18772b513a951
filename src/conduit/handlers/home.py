"""GET / and GET /api/info: basic service information."""

from conduit.constants import LOGIN_PATH, REGISTER_PATH
from conduit.router import RequestContext, json_response
from conduit.utils.version import get_version

DESCRIPTION = "Event-sourced CMS backend"


async def handler(ctx: RequestContext):
    version_info = get_version()
    return json_response(
        {
            "name": "Conduit",
            "version": version_info.version,
            "description": DESCRIPTION,
            "routes": {
                "home": "/",
                "info": "/api/info",
                "login": LOGIN_PATH,
                "register": REGISTER_PATH,
            },
        }
    )
