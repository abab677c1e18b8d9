"""Configuration for the wikiserve content server."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent  # wikiserve/config.py → wikiserve/ → project/

# Content root: served under /wiki/ and enumerated by /api/count
CONTENT_DIR = PROJECT_ROOT / "Data"

# Static assets, served under /static/
STATIC_DIR = PROJECT_ROOT / "Frontend" / "static"

# Pages root, served for every other path
PAGES_DIR = PROJECT_ROOT / "Frontend" / "pages"

# One <name>.html file per fragment
COMPONENTS_DIR = PROJECT_ROOT / "Frontend" / "components"

# Shell that rendered markdown is dropped into at {{ content }}
SHELL_TEMPLATE = STATIC_DIR / "wikishell.html"

# Fragment placeholders substituted into every HTML page, in this order
FRAGMENT_NAMES = ("head", "navbar", "footer")

# Reload fragments from disk on every request instead of using the cache
LIVE_MODE = True

# Server bind address
SERVER_HOST = "0.0.0.0"
SERVER_PORT = 4878


def site_dirs(root):
    """Directory settings for a site laid out like the project root."""
    root = Path(root)
    static_dir = root / "Frontend" / "static"
    return {
        "content_dir": str(root / "Data"),
        "static_dir": str(static_dir),
        "pages_dir": str(root / "Frontend" / "pages"),
        "components_dir": str(root / "Frontend" / "components"),
        "shell_template": str(static_dir / "wikishell.html"),
    }
