"""TMDB (The Movie Database) API client."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from ..constants import (
    APP_USER_AGENT,
    TMDB_API_BASE,
    TMDB_DEFAULT_IMAGE_SIZE,
    TMDB_IMAGE_BASE,
    TMDB_TIMEOUT_SECONDS,
)
from ..exceptions import ProviderUnavailable
from ..utils import setup_logger


@dataclass(frozen=True)
class MovieResult:
    """One row of a TMDB movie search."""

    id: int
    title: str
    release_date: str = ""
    vote_average: float = 0.0
    poster_path: str = ""
    overview: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MovieResult":
        return cls(
            id=data.get("id", 0),
            title=data.get("title") or data.get("original_title") or "",
            release_date=data.get("release_date") or "",
            vote_average=float(data.get("vote_average") or 0.0),
            poster_path=data.get("poster_path") or "",
            overview=data.get("overview") or "",
        )


@dataclass(frozen=True)
class TVResult:
    """One row of a TMDB TV search."""

    id: int
    name: str
    poster_path: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "TVResult":
        return cls(
            id=data.get("id", 0),
            name=data.get("name") or data.get("original_name") or "",
            poster_path=data.get("poster_path") or "",
        )


class TMDBClient:
    """Search TMDB for movies and TV shows and build poster URLs."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        timeout: float = TMDB_TIMEOUT_SECONDS,
        language: Optional[str] = None,
        image_size: str = TMDB_DEFAULT_IMAGE_SIZE,
    ) -> None:
        """Initialise the TMDB client.

        Args:
            api_key: TMDB API key. If empty, every search raises
                :class:`ProviderUnavailable`.
            timeout: Per-request timeout in seconds.
            language: Optional TMDB ``language`` parameter.
            image_size: Default size segment for :meth:`image_url`.
        """
        self.api_key = api_key
        self.timeout = timeout
        self.language = language
        self.image_size = image_size
        self.logger = setup_logger("tmdb_client", "metadata.log")
        if not self.api_key:
            self.logger.warning("TMDB API key not configured; lookups are disabled")

    # ── Public API ───────────────────────────────────────────────

    def search_movie(self, title: str) -> List[MovieResult]:
        """Search TMDB movies by title.

        Returns:
            Results in provider order; an empty list is a valid outcome.

        Raises:
            ProviderUnavailable: On network, auth or payload failure.
        """
        results = self._search("movie", title)
        return [MovieResult.from_json(r) for r in results]

    def search_tv(self, title: str) -> List[TVResult]:
        """Search TMDB TV shows by title.

        Raises:
            ProviderUnavailable: On network, auth or payload failure.
        """
        results = self._search("tv", title)
        return [TVResult.from_json(r) for r in results]

    def image_url(self, poster_path: str, size: str = "") -> str:
        """Build the public URL of a TMDB image, or ``""`` without a path."""
        if not poster_path:
            return ""
        return f"{TMDB_IMAGE_BASE}{size or self.image_size}{poster_path}"

    # ── Internals ────────────────────────────────────────────────

    def _search(self, kind: str, query: str) -> List[Dict[str, Any]]:
        if not self.api_key:
            raise ProviderUnavailable("TMDB API key not configured")

        params: Dict[str, Any] = {"api_key": self.api_key, "query": query}
        if self.language:
            params["language"] = self.language

        self.logger.debug("Searching TMDB %s for: '%s'", kind, query)
        try:
            response = requests.get(
                f"{TMDB_API_BASE}/search/{kind}",
                params=params,
                headers={"User-Agent": APP_USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ProviderUnavailable(f"TMDB {kind} search failed: {e}") from e
        except ValueError as e:
            raise ProviderUnavailable(f"TMDB returned invalid JSON: {e}") from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise ProviderUnavailable(f"TMDB {kind} search returned no result list")

        self.logger.debug("TMDB %s search '%s': %d result(s)", kind, query, len(results))
        return results
