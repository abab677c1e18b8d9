"""Markdown → HTML pipeline for content-root documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import markdown

from .fragments import FragmentSource, compose
from .paths import load_text

logger = logging.getLogger(__name__)

CONTENT_PLACEHOLDER = "{{ content }}"

MD_EXTENSIONS = [
    "extra",
    "sane_lists",
    "toc",
    "pymdownx.tilde",
    "pymdownx.tasklist",
]


def markdown_to_html(md_text: str) -> str:
    """Convert markdown to HTML with tables, footnotes, strikethrough and task lists enabled."""
    return markdown.Markdown(extensions=MD_EXTENSIONS).convert(md_text)


def render_markup(path: Path, shell_template: Path, source: FragmentSource) -> Optional[str]:
    """Render a markdown file into the shell template.

    Args:
        path: The markdown file.
        shell_template: HTML skeleton containing ``{{ content }}``.
        source: Fragment source used to compose the final page.

    Returns:
        The composed HTML page, or None if the markdown file or the shell
        template could not be loaded.
    """
    logger.debug("[Markup] Rendering markdown file: %s", path)
    md_text = load_text(path)
    if md_text is None:
        return None

    html_content = markdown_to_html(md_text)

    template = load_text(Path(shell_template))
    if template is None:
        logger.warning("[Markup] Shell template %s could not be loaded", shell_template)
        return None

    return compose(template.replace(CONTENT_PLACEHOLDER, html_content), source)
