"""Resolve a request path under a base directory to a served document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from pathlib import Path
from typing import Optional, Union

from .content_types import HTML, content_type, is_textual
from .fragments import FragmentSource, compose
from .markup import render_markup
from .paths import load_binary, load_text, sanitize_path

logger = logging.getLogger(__name__)

PLAIN_TEXT = "text/plain; charset=utf-8"

# Tried in order when a directory is requested
INDEX_FILES = ("index.html", "main.md")


@dataclass(frozen=True)
class ServedDocument:
    status: HTTPStatus
    content_type: str
    body: Union[str, bytes]

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK


def forbidden(message: str = "Invalid or unsafe path") -> ServedDocument:
    return ServedDocument(HTTPStatus.FORBIDDEN, PLAIN_TEXT, message)


def not_found(message: str = "File not found") -> ServedDocument:
    return ServedDocument(HTTPStatus.NOT_FOUND, PLAIN_TEXT, message)


def server_error(message: str) -> ServedDocument:
    return ServedDocument(HTTPStatus.INTERNAL_SERVER_ERROR, PLAIN_TEXT, message)


def _serve_index(directory: Path, shell_template: Path, source: FragmentSource) -> ServedDocument:
    for index_file in INDEX_FILES:
        candidate = directory / index_file
        if not candidate.exists():
            continue

        logger.debug("[Serve] Found index file: %s", candidate)
        if candidate.suffix == ".md":
            content = render_markup(candidate, shell_template, source)
        else:
            text = load_text(candidate)
            content = compose(text, source) if text is not None else None

        if content is not None:
            return ServedDocument(HTTPStatus.OK, HTML, content)
        logger.warning("[Serve] Index file %s could not be loaded", candidate)

    logger.info("[Serve] No index file found in directory: %s", directory)
    return not_found()


def _serve_file(full_path: Path, source: FragmentSource) -> ServedDocument:
    ctype = content_type(full_path)
    logger.debug("[Serve] Serving file %s as %s", full_path, ctype)

    body: Optional[Union[str, bytes]]
    if is_textual(ctype):
        body = load_text(full_path)
        if body is not None and ctype == HTML:
            body = compose(body, source)
    else:
        body = load_binary(full_path)

    if body is None:
        logger.info("[Serve] File not found or failed to load: %s", full_path)
        return not_found()
    return ServedDocument(HTTPStatus.OK, ctype, body)


def serve_path(
    base_dir: Path,
    raw_path: str,
    source: FragmentSource,
    shell_template: Path,
) -> ServedDocument:
    """Serve ``raw_path`` from ``base_dir``.

    An empty path or "/" means the base directory itself. Any other path
    goes through ``sanitize_path`` first; unsafe paths are answered with
    403 before the filesystem is touched.

    Directories are served through their index file (``index.html``, then
    ``main.md`` rendered into the shell template). Files are served with a
    content type from their extension. Every HTML response has its
    fragment placeholders composed; other text and binary files are sent
    as they are.
    """
    if raw_path in ("", "/"):
        relative = Path("")
    else:
        relative = sanitize_path(raw_path)
        if relative is None:
            logger.warning("[Serve] Blocked invalid/unsafe path: %r", raw_path)
            return forbidden()

    full_path = Path(base_dir) / relative
    logger.debug("[Serve] Resolved %r under %s to %s", raw_path, base_dir, full_path)

    if full_path.is_dir():
        document = _serve_index(full_path, shell_template, source)
    else:
        document = _serve_file(full_path, source)

    logger.log(
        logging.INFO if document.ok else logging.WARNING,
        "[Serve] %s %s -> %d %s",
        base_dir, raw_path or "/", document.status, document.content_type,
    )
    return document
