"""Tests for web_server.py and the catalog blueprint: JSON API, files and icons."""

import hashlib

import pytest

from mediashelf.constants import FILE_ICON_URL, FOLDER_ICON_URL, MODE_BACKGROUND
from mediashelf.web_server import CatalogServer


@pytest.fixture
def server_config(tmp_path, library_root):
    return {
        "web_server": {"host": "127.0.0.1", "port": 8097},
        "catalog": {"mode": "on_demand", "icon_cache_dir": str(tmp_path / "icons")},
        "tmdb": {"api_key": ""},
        "libraries": [{"name": "Test Library", "type": "movie", "path": str(library_root)}],
        "logging": {"debug": False},
    }


@pytest.fixture
def server(server_config, make_service):
    srv = CatalogServer(server_config, catalog=make_service())
    srv.app.config["TESTING"] = True
    return srv


@pytest.fixture
def client(server):
    with server.app.test_client() as c:
        yield c


# ── /api/libraries & /api/status ─────────────────────────────────


class TestLibraries:
    def test_lists_libraries_without_paths(self, client):
        resp = client.get("/api/libraries")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data == {
            "count": 1,
            "libraries": [{"id": 0, "name": "Test Library", "type": "movie"}],
        }

    def test_status(self, client):
        data = client.get("/api/status").get_json()
        assert data["mode"] == "on_demand"
        assert data["libraries"][0]["id"] == 0


# ── /api/list ────────────────────────────────────────────────────


class TestList:
    def test_root_listing(self, client):
        resp = client.get("/api/list?source=0")
        assert resp.status_code == 200
        data = resp.get_json()
        names = [item["name"] for item in data["items"]]
        assert data["count"] == len(names)
        assert ".env" not in names
        assert "song.mp3" in names

    def test_items_never_expose_absolute_paths(self, client):
        items = client.get("/api/list?source=0").get_json()["items"]
        assert all("absolute_path" not in item for item in items)

    def test_key_order_follows_entry_fields(self, client):
        item = client.get("/api/list?source=0&path=a").get_json()["items"][0]
        assert list(item)[:4] == ["name", "relative_path", "parent", "is_directory"]

    def test_hidden_flag_present(self, client):
        names = [i["name"] for i in client.get("/api/list?source=0&hidden").get_json()["items"]]
        assert ".env" in names

    def test_hidden_flag_false(self, client):
        names = [
            i["name"] for i in client.get("/api/list?source=0&hidden=false").get_json()["items"]
        ]
        assert ".env" not in names

    def test_subdirectory_with_enrichment(self, client, tmdb, inception):
        tmdb.search_movie.return_value = [inception]
        items = client.get("/api/list?source=0&path=a").get_json()["items"]
        by_path = {i["relative_path"]: i for i in items}
        assert by_path["a/movie.mp4"]["name"] == "Inception"
        assert by_path["a/movie.mp4"]["line2"] == "8.8/10"
        assert by_path["a/sub"]["icon_url"] == FOLDER_ICON_URL

    def test_source_defaults_to_first_library(self, client):
        assert client.get("/api/list").status_code == 200

    def test_unknown_library_is_404(self, client):
        resp = client.get("/api/list?source=9")
        assert resp.status_code == 404
        assert "9" in resp.get_json()["error"]

    def test_non_numeric_library_is_404(self, client):
        assert client.get("/api/list?source=abc").status_code == 404

    def test_missing_path_is_404(self, client):
        resp = client.get("/api/list?source=0&path=nope")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_traversal_is_404(self, client):
        assert client.get("/api/list?source=0&path=../..").status_code == 404


class TestBackgroundList:
    @pytest.fixture
    def bg_client(self, server_config, make_service):
        service = make_service(mode=MODE_BACKGROUND)
        service.start_background_index()
        service.wait_for_index(timeout=10)
        srv = CatalogServer(server_config, catalog=service)
        with srv.app.test_client() as c:
            yield c

    def test_paging_params(self, bg_client):
        page1 = bg_client.get("/api/list?source=0&page=1&size=2").get_json()
        page2 = bg_client.get("/api/list?source=0&page=2&size=2").get_json()
        assert page1["count"] == 2
        assert page2["count"] == 2
        assert page1["items"] != page2["items"]

    def test_bad_paging_params_fall_back(self, bg_client):
        data = bg_client.get("/api/list?source=0&page=x&size=-4").get_json()
        assert data["count"] > 0

    @pytest.mark.parametrize("size", ["abc", "0", "-4", ""])
    def test_bad_size_uses_configured_page_size(self, server_config, make_service, size):
        service = make_service(mode=MODE_BACKGROUND, page_size=3)
        service.start_background_index()
        service.wait_for_index(timeout=10)
        srv = CatalogServer(server_config, catalog=service)
        with srv.app.test_client() as c:
            data = c.get(f"/api/list?source=0&size={size}").get_json()
        assert data["count"] == 3

    def test_hidden_directory(self, bg_client):
        names = [i["name"] for i in bg_client.get("/api/list?source=0").get_json()["items"]]
        assert ".cache" not in names
        items = bg_client.get("/api/list?source=0&hidden").get_json()["items"]
        assert {i["name"]: i["is_directory"] for i in items}[".cache"] is True

    def test_status_reports_index(self, bg_client):
        lib = bg_client.get("/api/status").get_json()["libraries"][0]
        assert lib["complete"] is True
        assert lib["entries"] == 11


# ── /api/entry ───────────────────────────────────────────────────


class TestEntry:
    def test_single_file(self, client):
        resp = client.get("/api/entry?source=0&path=notes.xyz")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["name"] == "notes.xyz"
        assert data["icon_url"] == FILE_ICON_URL

    def test_missing_file(self, client):
        assert client.get("/api/entry?source=0&path=missing.bin").status_code == 404


# ── /view, /icon, /icons ─────────────────────────────────────────


class TestFiles:
    def test_view_serves_file(self, client):
        resp = client.get("/view?source=0&path=notes.xyz")
        assert resp.status_code == 200
        assert resp.data == b"hello"
        resp.close()

    def test_view_missing(self, client):
        assert client.get("/view?source=0&path=nope.txt").status_code == 404

    def test_view_directory(self, client):
        assert client.get("/view?source=0&path=a").status_code == 404

    def test_view_traversal(self, client):
        assert client.get("/view?source=0&path=../../etc/passwd").status_code == 404

    def test_icon_redirects_remote(self, client):
        resp = client.get("/icon?source=0&path=notes.xyz")
        assert resp.status_code == 303
        assert resp.headers["Location"] == FILE_ICON_URL

    def test_icon_for_image_is_the_image(self, client, library_root):
        resp = client.get("/icon?source=0&path=photo.jpg")
        assert resp.status_code == 200
        assert resp.data == (library_root / "photo.jpg").read_bytes()
        resp.close()

    def test_extracted_icon_served_from_cache(self, client, library_root):
        item = client.get("/api/entry?source=0&path=app.apk").get_json()
        name = hashlib.md5(str(library_root / "app.apk").encode()).hexdigest() + ".png"
        assert item["icon_url"] == f"/icons/{name}"

        resp = client.get(item["icon_url"])
        assert resp.status_code == 200
        assert resp.mimetype == "image/png"
        assert resp.data.startswith(b"\x89PNG")
        resp.close()

    def test_icon_redirects_to_cached_icon(self, client):
        resp = client.get("/icon?source=0&path=app.apk")
        assert resp.status_code == 303
        assert resp.headers["Location"].startswith("/icons/")

    def test_unknown_cached_icon(self, client):
        assert client.get("/icons/0000.png").status_code == 404


# ── Error handling ───────────────────────────────────────────────


class TestErrors:
    def test_unknown_route_is_json_404(self, client):
        resp = client.get("/no/such/route")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}

    def test_method_not_allowed_passes_through(self, client):
        assert client.post("/api/libraries").status_code == 405

    @pytest.mark.parametrize("route", ["/api/list", "/api/entry", "/view", "/icon"])
    def test_nul_byte_in_path_is_404(self, client, route):
        resp = client.get(f"{route}?source=0&path=notes.xyz%00.jpg")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_unexpected_error_is_json_500(self, server, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(server.catalog, "list_library_path", boom)
        server.app.config["TESTING"] = False
        server.app.config["PROPAGATE_EXCEPTIONS"] = False
        with server.app.test_client() as c:
            resp = c.get("/api/list?source=0")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Internal Server Error"}
