import json

import pytest

from wikiserve import create_app


def test_pages_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    assert response.get_data(as_text=True) == "<head>H</head><h1>Home</h1><footer>F</footer>"


def test_pages_file(client):
    response = client.get("/about.html")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "<nav>N</nav><p>About</p>"


def test_wiki_directory_renders_markdown(client):
    response = client.get("/wiki/Alpha")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    body = response.get_data(as_text=True)
    assert "<nav>N</nav>" in body
    assert "Alpha</h1>" in body


def test_wiki_directory_index_html(client):
    response = client.get("/wiki/Beta")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "<p>Beta <nav>N</nav></p>"


def test_wiki_root_without_index(client):
    assert client.get("/wiki/").status_code == 404


def test_static_css(client):
    response = client.get("/static/style.css")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/css; charset=utf-8"
    assert "{{ head }}" in response.get_data(as_text=True)


def test_static_binary(client):
    response = client.get("/static/logo.png")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "image/png"
    assert response.data == b"\x89PNG\r\n\x1a\n\x00\xff"


def test_traversal_forbidden(client):
    response = client.get("/wiki/Alpha/../../secret.txt")
    assert response.status_code == 403
    assert response.get_data(as_text=True) == "Invalid or unsafe path"


@pytest.mark.parametrize("url", ["/missing.html", "/wiki/Nope", "/static/nope.js"])
def test_not_found(client, url):
    response = client.get(url)
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "File not found"


def test_api_count(client):
    response = client.get("/api/count")
    assert response.status_code == 200
    payload = json.loads(response.data)
    assert sorted(payload["folders"]) == ["Alpha", "Beta"]
    assert payload["count"] == 2


def test_api_count_unreadable_root(make_app, site, tmp_path):
    app = make_app(content_dir=str(tmp_path / "gone"))
    response = app.test_client().get("/api/count")
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Failed to read data directory"


def test_live_mode_picks_up_fragment_edits(make_app, site):
    client = make_app(live=True).test_client()
    assert client.get("/about.html").get_data(as_text=True) == "<nav>N</nav><p>About</p>"

    (site["components_dir"] / "navbar.html").write_text("<nav>N2</nav>", encoding="utf-8")
    assert client.get("/about.html").get_data(as_text=True) == "<nav>N2</nav><p>About</p>"


def test_cached_mode_keeps_startup_fragments(make_app, site):
    client = make_app(live=False).test_client()
    (site["components_dir"] / "navbar.html").write_text("<nav>N2</nav>", encoding="utf-8")
    assert client.get("/about.html").get_data(as_text=True) == "<nav>N</nav><p>About</p>"


def test_content_changes_picked_up_per_request(client, site):
    (site["pages_dir"] / "new.html").write_text("fresh", encoding="utf-8")
    assert client.get("/new.html").get_data(as_text=True) == "fresh"


def test_repeated_requests_byte_identical(client):
    assert client.get("/wiki/Alpha").data == client.get("/wiki/Alpha").data


def test_create_app_has_no_builtin_static_route(site):
    app = create_app({key: str(value) for key, value in site.items()})
    endpoints = {rule.endpoint for rule in app.url_map.iter_rules()}
    assert "static" not in endpoints


def test_wiki_without_trailing_slash_redirects(client):
    response = client.get("/wiki")
    assert response.status_code == 308
    assert response.headers["Location"].endswith("/wiki/")
