"""Static file serving utilities."""

import mimetypes
from pathlib import Path

from fastapi.responses import FileResponse
from loguru import logger

STATIC_CACHE_CONTROL = "public, max-age=31536000"

# Types the platform registry does not always know about
_EXTRA_MIME_TYPES = {
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
}


def get_mime_type(file_path: str | Path) -> str:
    """Get MIME type from file extension, defaulting to ``application/octet-stream``."""
    suffix = Path(file_path).suffix.lower()
    if suffix in _EXTRA_MIME_TYPES:
        return _EXTRA_MIME_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(f"file{suffix}")
    return guessed or "application/octet-stream"


def resolve_static_path(public_dir: Path, request_path: str) -> Path | None:
    """Map a request path onto a file inside ``public_dir``.

    Returns None for directory-like paths, missing files and any path that
    resolves outside of ``public_dir``.
    """
    relative = request_path.lstrip("/")
    if relative == "" or relative.endswith("/"):
        return None

    root = public_dir.resolve()
    candidate = (root / relative).resolve()
    if not candidate.is_relative_to(root):
        logger.warning(f"Refusing static path outside public directory: {request_path}")
        return None

    if not candidate.is_file():
        return None
    return candidate


def serve_static_file(public_dir: Path, request_path: str) -> FileResponse | None:
    """Serve a static file from the filesystem, or return None if there is none."""
    file_path = resolve_static_path(public_dir, request_path)
    if file_path is None:
        return None

    return FileResponse(
        file_path,
        media_type=get_mime_type(file_path),
        headers={"Cache-Control": STATIC_CACHE_CONTROL},
    )


def serve_spa_index(public_dir: Path) -> FileResponse | None:
    """Serve ``index.html`` for single-page-app routing (never cached)."""
    index_path = public_dir / "index.html"
    if not index_path.is_file():
        return None

    return FileResponse(index_path, media_type="text/html", headers={"Cache-Control": "no-cache"})
