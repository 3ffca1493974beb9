"""Static processors: music, image and the catch-all default."""

from pathlib import Path
from urllib.parse import urlencode

from ..classifier import classify_filename
from ..constants import (
    FILE_ICON_URL,
    MEDIA_FILE,
    MEDIA_IMAGE,
    MEDIA_MUSIC,
    MUSIC_ICON_URL,
    MUSIC_ICON_URLS,
)
from ..models import CatalogEntry
from .base import Processor


class MusicProcessor(Processor):
    """Audio files get a static icon per format; no network."""

    name = "music"

    def matches(self, filename: str) -> bool:
        return classify_filename(filename) == MEDIA_MUSIC

    def describe(self, path: str, entry: CatalogEntry) -> None:
        entry.media_type = MEDIA_MUSIC
        entry.icon_url = MUSIC_ICON_URLS.get(Path(path).suffix.lower(), MUSIC_ICON_URL)


class ImageProcessor(Processor):
    """Images are their own icon, served through the view endpoint."""

    name = "image"

    def matches(self, filename: str) -> bool:
        return classify_filename(filename) == MEDIA_IMAGE

    def describe(self, path: str, entry: CatalogEntry) -> None:
        entry.media_type = MEDIA_IMAGE
        query = urlencode({"source": entry.library_id, "path": entry.relative_path})
        entry.icon_url = f"/view?{query}"


class DefaultProcessor(Processor):
    """Claims every file; generic type and icon."""

    name = "default"

    def matches(self, filename: str) -> bool:
        return True

    def describe(self, path: str, entry: CatalogEntry) -> None:
        entry.media_type = MEDIA_FILE
        entry.icon_url = FILE_ICON_URL
