"""Helpers shared by every publisher backend."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from techdocs.exceptions import ReadError

STATIC_CACHE_CONTROL = "public, max-age=3600"

_CONTENT_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".htm": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript",
    ".json": "application/json",
    ".map": "application/json",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".txt": "text/plain; charset=utf-8",
    ".xml": "application/xml",
}

# Pages and metadata change on every publish
_NO_CACHE = {".html", ".htm", ".json"}


def get_content_type(file_path: str) -> str:
    extension = Path(file_path).suffix.lower()
    if extension in _CONTENT_TYPES:
        return _CONTENT_TYPES[extension]
    guessed, _ = mimetypes.guess_type(file_path)
    return guessed or "application/octet-stream"


def get_headers_for_file_extension(extension: str) -> dict[str, str]:
    """Response headers for a file served from the docs bucket.

    ``extension`` is the suffix including the dot, e.g. ``.css``.
    """
    extension = extension.lower()
    headers = {"Content-Type": get_content_type(f"file{extension}")}
    if extension in _CONTENT_TYPES and extension not in _NO_CACHE:
        headers["Cache-Control"] = STATIC_CACHE_CONTROL
    return headers


def get_file_tree_recursively(directory: Path) -> list[tuple[Path, str]]:
    """List every regular file under ``directory``.

    Returns ``(absolute path, relative POSIX path)`` pairs sorted by the
    relative path, e.g. ``index.html``, ``sub-page/index.html``.

    Raises:
        ReadError: If ``directory`` does not exist or is not a directory.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise ReadError(f"Source directory does not exist: {directory}", {"directory": str(directory)})
    files = [
        (path, path.relative_to(root).as_posix())
        for path in root.rglob("*")
        if path.is_file()
    ]
    return sorted(files, key=lambda item: item[1])


__all__ = [
    "STATIC_CACHE_CONTROL",
    "get_content_type",
    "get_headers_for_file_extension",
    "get_file_tree_recursively",
]
