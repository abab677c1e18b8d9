"""Extension → MIME type table for served files."""

from __future__ import annotations

from pathlib import Path

HTML = "text/html; charset=utf-8"
FALLBACK = "application/octet-stream"

# Markdown is rendered before it is served, so it goes out as HTML.
CONTENT_TYPES = {
    "html": HTML,
    "htm": HTML,
    "md": HTML,
    "css": "text/css; charset=utf-8",
    "js": "application/javascript; charset=utf-8",
    "json": "application/json; charset=utf-8",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "txt": "text/plain; charset=utf-8",
    "pdf": "application/pdf",
    "zip": "application/zip",
}


def content_type(path: Path) -> str:
    """Return the content type for ``path`` based on its extension.

    Matching is exact (case-sensitive); unknown or missing extensions
    fall back to ``application/octet-stream``.
    """
    return CONTENT_TYPES.get(Path(path).suffix[1:], FALLBACK)


def is_textual(ctype: str) -> bool:
    """True for types served as decoded text rather than raw bytes."""
    return ctype.startswith("text/") or "javascript" in ctype or "json" in ctype
