from pathlib import Path

import pytest

from wikiserve import create_app
from wikiserve.config import site_dirs

SHELL = "<html>{{ head }}<body>{{ navbar }}<main>{{ content }}</main>{{ footer }}</body></html>"


def write(path: Path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """A site tree laid out like the project root."""
    root = tmp_path / "site"
    dirs = {key: Path(value) for key, value in site_dirs(root).items()}

    components = dirs["components_dir"]
    write(components / "head.html", "<head>H</head>")
    write(components / "navbar.html", "<nav>N</nav>")
    write(components / "footer.html", "<footer>F</footer>")
    write(dirs["shell_template"], SHELL)

    write(dirs["pages_dir"] / "index.html", "{{ head }}<h1>Home</h1>{{ footer }}")
    write(dirs["pages_dir"] / "about.html", "{{ navbar }}<p>About</p>")

    content = dirs["content_dir"]
    write(content / "Alpha" / "main.md", "# Alpha\n\nSome *text*.\n")
    write(content / "Beta" / "index.html", "<p>Beta {{ navbar }}</p>")
    write(content / "readme.txt", "not a folder")

    static = dirs["static_dir"]
    write(static / "style.css", "body { color: red; } /* {{ head }} */")
    write(static / "logo.png", b"\x89PNG\r\n\x1a\n\x00\xff")
    return dirs


@pytest.fixture
def make_app(site):
    def make(**overrides):
        config = {key: str(value) for key, value in site.items()}
        config.update(overrides)
        app = create_app(config)
        app.config["TESTING"] = True
        return app

    return make


@pytest.fixture
def client(make_app):
    return make_app(live=False).test_client()
