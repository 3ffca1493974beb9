"""
External collaborators used by the enrichment processors.

Each module encapsulates a single API / library:
- ``tmdb_client``     – TMDB movie & TV search, poster URLs
- ``filename_parser`` – guessit-based title / season / episode parsing
- ``apk_client``      – Android package icon & label extraction
"""

from .apk_client import ApkIconExtractor
from .filename_parser import FilenameParser, ParsedName
from .tmdb_client import MovieResult, TMDBClient, TVResult

__all__ = [
    "ApkIconExtractor",
    "FilenameParser",
    "ParsedName",
    "TMDBClient",
    "MovieResult",
    "TVResult",
]
