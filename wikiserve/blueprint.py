"""Flask Blueprint for the wikiserve content server."""

import logging
import os
from pathlib import Path

from flask import Blueprint, Response, jsonify

from .config import (
    COMPONENTS_DIR,
    CONTENT_DIR,
    LIVE_MODE,
    PAGES_DIR,
    SHELL_TEMPLATE,
    STATIC_DIR,
)
from .fragments import make_fragment_source
from .responder import serve_path, server_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "content_dir": str(CONTENT_DIR),
    "static_dir": str(STATIC_DIR),
    "pages_dir": str(PAGES_DIR),
    "components_dir": str(COMPONENTS_DIR),
    "shell_template": str(SHELL_TEMPLATE),
    "live": LIVE_MODE,
}


def to_response(document):
    """Convert a ServedDocument into a Flask Response."""
    return Response(
        document.body,
        status=int(document.status),
        content_type=document.content_type,
    )


def list_folders(directory):
    """Names of the immediate subdirectories of ``directory``.

    Raises OSError if the directory itself cannot be read.
    """
    with os.scandir(directory) as entries:
        return [entry.name for entry in entries if entry.is_dir()]


def create_blueprint(name="wiki", config=None, source=None):
    """Create and return the wikiserve Flask Blueprint.

    Args:
        name: Blueprint name (used for url_for namespacing).
        config: Optional dict overriding DEFAULT_CONFIG keys.
            - content_dir (Path|str): Content root, served at /wiki/ and counted by /api/count.
            - static_dir (Path|str): Static assets, served at /static/.
            - pages_dir (Path|str): Pages root, served for every other path.
            - components_dir (Path|str): Directory holding <fragment>.html files.
            - shell_template (Path|str): HTML shell that rendered markdown goes into.
            - live (bool): Reload fragments on every request instead of caching them.
        source: Optional fragment source; built from components_dir and live if omitted.

    Returns:
        A Flask Blueprint that serves the site.
    """
    cfg = {**DEFAULT_CONFIG, **(config or {})}
    bp = Blueprint(name, __name__)

    content_dir = Path(cfg["content_dir"])
    static_dir = Path(cfg["static_dir"])
    pages_dir = Path(cfg["pages_dir"])
    shell_template = Path(cfg["shell_template"])
    if source is None:
        source = make_fragment_source(Path(cfg["components_dir"]), cfg["live"])

    def serve(base_dir, subpath):
        return to_response(serve_path(base_dir, subpath, source, shell_template))

    @bp.route("/wiki/", defaults={"subpath": ""})
    @bp.route("/wiki/<path:subpath>")
    def wiki(subpath):
        logger.debug("[Serve] Handling request for '/wiki/%s'", subpath)
        return serve(content_dir, subpath)

    @bp.route("/static/", defaults={"subpath": ""})
    @bp.route("/static/<path:subpath>")
    def static_files(subpath):
        subpath = subpath.lstrip("/")
        logger.debug("[Serve] Handling request for '/static/%s'", subpath)
        return serve(static_dir, subpath)

    @bp.route("/api/count")
    def count_folders():
        try:
            folders = list_folders(content_dir)
        except OSError as e:
            logger.error("[API] Error reading %s: %s", content_dir, e)
            return to_response(server_error("Failed to read data directory"))

        logger.info("[API] Found %d folders.", len(folders))
        return jsonify({"folders": folders, "count": len(folders)})

    @bp.route("/", defaults={"subpath": ""})
    @bp.route("/<path:subpath>")
    def pages(subpath):
        logger.debug("[Serve] Handling generic request for '/%s'", subpath)
        return serve(pages_dir, subpath)

    return bp
