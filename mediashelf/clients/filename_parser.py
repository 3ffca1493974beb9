"""Filename parsing on top of ``guessit``."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from guessit import guessit


@dataclass(frozen=True)
class ParsedName:
    """Best-guess title plus optional season/episode markers."""

    title: str
    season: Optional[str] = None
    episode: Optional[str] = None

    @property
    def is_episode(self) -> bool:
        return bool(self.season) and bool(self.episode)


class FilenameParser:
    """Extract a search title and season/episode markers from a filename."""

    def parse(self, name: str) -> ParsedName:
        """Parse a media filename.

        Absent season or episode is ``None``; parsing never raises.
        """
        try:
            result = guessit(name)
        except Exception:
            return ParsedName(title=Path(name).stem)

        title = str(result.get("title", "")) or Path(name).stem
        return ParsedName(
            title=title,
            season=_marker(result.get("season")),
            episode=_marker(result.get("episode")),
        )


def _marker(value: Any) -> Optional[str]:
    """guessit yields a list for multi-episode files; keep the first."""
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    return str(value)
