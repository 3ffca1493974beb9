"""
Enrichment processors.

Dispatch order matters: :func:`build_registry` lists the specific
processors first and the default processor last.
"""

from pathlib import Path

from ..clients import ApkIconExtractor, FilenameParser, TMDBClient
from ..constants import ICON_TIMEOUT_SECONDS
from .base import Processor, ProcessorRegistry
from .package_icon import PackageIconProcessor
from .simple import DefaultProcessor, ImageProcessor, MusicProcessor
from .video import VideoProcessor


def build_registry(
    tmdb_client: TMDBClient,
    icon_extractor: ApkIconExtractor,
    icon_cache_dir: Path,
    *,
    filename_parser: FilenameParser = None,
    icon_timeout: float = ICON_TIMEOUT_SECONDS,
) -> ProcessorRegistry:
    """Build the standard registry: package, video, music, image, default."""
    return ProcessorRegistry(
        [
            PackageIconProcessor(icon_extractor, icon_cache_dir, timeout=icon_timeout),
            VideoProcessor(tmdb_client, filename_parser),
            MusicProcessor(),
            ImageProcessor(),
        ],
        fallback=DefaultProcessor(),
    )


__all__ = [
    "Processor",
    "ProcessorRegistry",
    "PackageIconProcessor",
    "VideoProcessor",
    "MusicProcessor",
    "ImageProcessor",
    "DefaultProcessor",
    "build_registry",
]
