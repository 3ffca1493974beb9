"""
Test fixtures and configuration for pytest
"""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image

from mediashelf.clients.tmdb_client import MovieResult, TMDBClient, TVResult
from mediashelf.constants import MODE_ON_DEMAND
from mediashelf.models import Library
from mediashelf.processors import build_registry
from mediashelf.services.catalog_service import CatalogService
from mediashelf.services.directory_scanner import DirectoryScanner


def png_bytes(size=(8, 8), color=(200, 30, 30, 255)) -> bytes:
    buf = BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def tmdb():
    """TMDB client double: no results unless a test says otherwise."""
    client = MagicMock(spec=TMDBClient)
    client.search_movie.return_value = []
    client.search_tv.return_value = []
    client.image_url.side_effect = lambda path, size="": (
        f"https://image.tmdb.org/t/p/w500{path}" if path else ""
    )
    return client


@pytest.fixture
def inception():
    return MovieResult(
        id=27205,
        title="Inception",
        release_date="2010-07-15",
        vote_average=8.8,
        poster_path="/inception.jpg",
        overview="A thief who steals corporate secrets...",
    )


@pytest.fixture
def foo_show():
    return TVResult(id=42, name="Foo Show", poster_path="/foo.jpg")


@pytest.fixture
def icon_extractor():
    """Icon extractor double returning a small RGBA image."""
    extractor = MagicMock()
    extractor.open.side_effect = lambda path: {"path": path}
    extractor.icon.side_effect = lambda handle: Image.open(BytesIO(png_bytes()))
    extractor.label.return_value = "Sample App"
    extractor.package_identifier.return_value = "com.example.sample"
    return extractor


@pytest.fixture
def library_root(tmp_path):
    """Library tree used across scanner and service tests.

    root/
      a/movie.mp4
      a/.hidden
      a/sub/
      song.mp3
      photo.jpg
      notes.xyz
      app.apk
      .env
      .cache/thumb.jpg
    """
    root = tmp_path / "library"
    (root / "a" / "sub").mkdir(parents=True)
    (root / "a" / "movie.mp4").write_bytes(b"\x00" * 100)
    (root / "a" / ".hidden").write_text("secret")
    (root / "song.mp3").write_bytes(b"\x00" * 10)
    (root / "photo.jpg").write_bytes(png_bytes())
    (root / "notes.xyz").write_text("hello")
    (root / "app.apk").write_bytes(b"PK\x03\x04 not really")
    (root / ".env").write_text("TMDB_API_KEY=x")
    (root / ".cache").mkdir()
    (root / ".cache" / "thumb.jpg").write_bytes(png_bytes())
    return root


@pytest.fixture
def library(library_root):
    return Library(id=0, name="Test Library", type="movie", path=str(library_root))


@pytest.fixture
def registry(tmdb, icon_extractor, tmp_path):
    return build_registry(tmdb, icon_extractor, tmp_path / "icons", icon_timeout=5)


@pytest.fixture
def scanner(registry):
    return DirectoryScanner(registry)


@pytest.fixture
def make_service(library, scanner):
    """Factory for a catalog service over the test library."""

    def _make(mode=MODE_ON_DEMAND, **kwargs):
        return CatalogService([library], scanner, mode=mode, **kwargs)

    return _make
