"""Extension-based media type classification."""

from pathlib import Path

from .constants import (
    IMAGE_EXTENSIONS,
    MEDIA_FILE,
    MEDIA_IMAGE,
    MEDIA_MUSIC,
    MEDIA_PACKAGE,
    MEDIA_VIDEO,
    MUSIC_EXTENSIONS,
    PACKAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)


def classify_extension(extension: str) -> str:
    """
    Map a file extension to a media type hint.

    Returns one of: video, music, image, package, file.  Unknown extensions
    are the default case, not an error.
    """
    ext = (extension or "").lower()
    if ext and not ext.startswith("."):
        ext = "." + ext

    if ext in VIDEO_EXTENSIONS:
        return MEDIA_VIDEO
    elif ext in MUSIC_EXTENSIONS:
        return MEDIA_MUSIC
    elif ext in IMAGE_EXTENSIONS:
        return MEDIA_IMAGE
    elif ext in PACKAGE_EXTENSIONS:
        return MEDIA_PACKAGE
    return MEDIA_FILE


def classify_filename(filename: str) -> str:
    """Classify by the suffix of *filename*."""
    return classify_extension(Path(filename).suffix)
