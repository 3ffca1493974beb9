"""
Movie / TV enrichment backed by TMDB.

The filename is parsed with guessit.  A season *and* an episode marker
route the lookup to TV search, anything else to movie search.  Only the
first search result is used; ranking and year disambiguation are left to
the provider.
"""

import os
from typing import Any, Dict, Optional

from ..cache import ResultCache
from ..classifier import classify_filename
from ..clients.filename_parser import FilenameParser, ParsedName
from ..clients.tmdb_client import TMDBClient
from ..constants import MEDIA_MOVIE, MEDIA_TVSHOW, MEDIA_VIDEO
from ..exceptions import EmptyMatch, ProviderUnavailable
from ..models import CatalogEntry
from ..utils import setup_logger
from .base import Processor


class VideoProcessor(Processor):
    """Rename video entries after their TMDB movie or TV show match."""

    name = "video"

    def __init__(
        self,
        tmdb_client: TMDBClient,
        filename_parser: Optional[FilenameParser] = None,
        cache: Optional[ResultCache] = None,
    ):
        self.tmdb = tmdb_client
        self.parser = filename_parser or FilenameParser()
        self.cache = cache if cache is not None else ResultCache("video")
        self.logger = setup_logger("video_processor", "processors.log")

    def matches(self, filename: str) -> bool:
        return classify_filename(filename) == MEDIA_VIDEO

    def process(self, path: str) -> None:
        self.cache.get_or_compute(path, lambda: self._lookup(path))

    def describe(self, path: str, entry: CatalogEntry) -> None:
        entry.media_type = MEDIA_VIDEO
        match, _ = self.cache.get(path)
        if not match:
            return

        entry.media_type = match["media_type"]
        entry.name = match["name"]
        entry.icon_url = match["icon_url"]
        if match["media_type"] == MEDIA_MOVIE:
            entry.line1 = match["release_date"]
            entry.line2 = match["rating"]
        entry.extra.update(match["extra"])

    # ── Lookups ──────────────────────────────────────────────────

    def _lookup(self, path: str) -> Optional[Dict[str, Any]]:
        """Return the match record, or ``None`` when nothing usable came back.

        A miss is remembered like a hit so the provider is asked once per file.
        """
        parsed = self.parser.parse(os.path.basename(path))
        try:
            if parsed.is_episode:
                return self._lookup_tv(parsed)
            return self._lookup_movie(parsed)
        except EmptyMatch as e:
            self.logger.info("%s: %s", os.path.basename(path), e)
        except ProviderUnavailable as e:
            self.logger.warning("TMDB lookup failed for %s: %s", path, e)
        return None

    def _lookup_tv(self, parsed: ParsedName) -> Dict[str, Any]:
        results = self.tmdb.search_tv(parsed.title)
        if not results:
            raise EmptyMatch(f"No TMDB TV results for '{parsed.title}'")

        show = results[0]
        self.logger.info(
            "TMDB TV match: '%s' -> %s (S%sE%s)",
            parsed.title,
            show.name,
            parsed.season,
            parsed.episode,
        )
        return {
            "media_type": MEDIA_TVSHOW,
            "name": show.name,
            "icon_url": self.tmdb.image_url(show.poster_path),
            "extra": {
                "tmdb_id": show.id,
                "season": parsed.season,
                "episode": parsed.episode,
            },
        }

    def _lookup_movie(self, parsed: ParsedName) -> Dict[str, Any]:
        results = self.tmdb.search_movie(parsed.title)
        if not results:
            raise EmptyMatch(f"No TMDB movie results for '{parsed.title}'")

        movie = results[0]
        self.logger.info("TMDB movie match: '%s' -> %s", parsed.title, movie.title)
        return {
            "media_type": MEDIA_MOVIE,
            "name": movie.title,
            "icon_url": self.tmdb.image_url(movie.poster_path),
            "release_date": movie.release_date,
            "rating": f"{movie.vote_average:.1f}/10",
            "extra": {
                "tmdb_id": movie.id,
                "overview": movie.overview,
            },
        }
