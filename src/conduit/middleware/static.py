"""Static file middleware with optional single-page-app fallback."""

from collections.abc import Sequence
from pathlib import Path

from fastapi.responses import Response

from conduit.router import CallNext, Middleware, RequestContext
from conduit.utils.static import serve_spa_index, serve_static_file


def _is_excluded(path: str, exclude: Sequence[str]) -> bool:
    for pattern in exclude:
        if pattern.endswith("*"):
            if path.startswith(pattern[:-1]):
                return True
        elif path == pattern:
            return True
    return False


def static_files(public_dir: str | Path, spa: bool = True, exclude: Sequence[str] = ()) -> Middleware:
    """Serve files from ``public_dir``.

    Args:
        public_dir: Directory to serve
        spa: Answer unknown paths with ``index.html``
        exclude: Paths skipped entirely; a trailing ``*`` matches a prefix (``/api/*``)
    """
    root = Path(public_dir).resolve()

    async def middleware(ctx: RequestContext, call_next: CallNext) -> Response:
        path = ctx.url.path
        if ctx.request.method not in ("GET", "HEAD") or _is_excluded(path, exclude):
            return await call_next()

        response = serve_static_file(root, path)
        if response is None and spa:
            response = serve_spa_index(root)
        if response is not None:
            return response

        return await call_next()

    return middleware
