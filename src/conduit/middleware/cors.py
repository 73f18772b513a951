"""CORS middleware."""

from collections.abc import Sequence

from fastapi.responses import Response

from conduit.router import CallNext, Middleware, RequestContext

DEFAULT_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
DEFAULT_ALLOWED_HEADERS = ("Content-Type", "Authorization")


def cors(
    origin: str | Sequence[str] = "*",
    methods: Sequence[str] = DEFAULT_METHODS,
    allowed_headers: Sequence[str] = DEFAULT_ALLOWED_HEADERS,
    exposed_headers: Sequence[str] = (),
    credentials: bool = False,
    max_age: int = 86400,
) -> Middleware:
    """Add Cross-Origin Resource Sharing headers.

    ``OPTIONS`` preflight requests are answered with 204 right away. With a
    list of origins, only a listed request ``Origin`` is echoed back.
    """

    def build_headers(request_origin: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}

        if isinstance(origin, str):
            headers["Access-Control-Allow-Origin"] = origin
        elif request_origin is not None and request_origin in origin:
            headers["Access-Control-Allow-Origin"] = request_origin
            headers["Vary"] = "Origin"

        headers["Access-Control-Allow-Methods"] = ", ".join(methods)
        if allowed_headers:
            headers["Access-Control-Allow-Headers"] = ", ".join(allowed_headers)
        if exposed_headers:
            headers["Access-Control-Expose-Headers"] = ", ".join(exposed_headers)
        if credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        headers["Access-Control-Max-Age"] = str(max_age)
        return headers

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        cors_headers = build_headers(ctx.request.headers.get("origin"))

        if ctx.request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers)

        response = await call_next()
        response.headers.update(cors_headers)
        return response

    return middleware
