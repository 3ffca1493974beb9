"""
Centralised constants for the MediaShelf catalog.

Extension tables, icon URLs, paging defaults and timeouts live here so they
can be imported by any module without circular dependencies.
"""

from pathlib import Path

# ── Version ──────────────────────────────────────────────────────
APP_VERSION = "0.1.0"
APP_USER_AGENT = f"MediaShelf/{APP_VERSION}"

# ── Default paths ────────────────────────────────────────────────
DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_ICON_CACHE_DIR = Path("/tmp") / "mediashelf-icons"

# ── Media types ──────────────────────────────────────────────────
MEDIA_DIRECTORY = "directory"
MEDIA_MOVIE = "movie"
MEDIA_TVSHOW = "tvshow"
MEDIA_VIDEO = "video"
MEDIA_MUSIC = "music"
MEDIA_IMAGE = "image"
MEDIA_PACKAGE = "package"
MEDIA_FILE = "file"

# ── File extension sets ──────────────────────────────────────────
VIDEO_EXTENSIONS = frozenset(
    {
        ".mp4",
        ".mkv",
        ".avi",
        ".mpg",
        ".mpeg",
        ".m4v",
        ".mov",
        ".webm",
        ".wmv",
    }
)
MUSIC_EXTENSIONS = frozenset(
    {
        ".mp3",
        ".flac",
        ".wav",
        ".aac",
        ".m4a",
        ".ogg",
        ".opus",
    }
)
IMAGE_EXTENSIONS = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".webp",
        ".bmp",
    }
)
PACKAGE_EXTENSIONS = frozenset({".apk"})

# ── Icons ────────────────────────────────────────────────────────
FOLDER_ICON_URL = "https://cdn-icons-png.freepik.com/256/12532/12532956.png"
FILE_ICON_URL = "https://cdn-icons-png.flaticon.com/256/607/607674.png"
MUSIC_ICON_URL = "https://cdn-icons-png.flaticon.com/512/4039/4039628.png"
MUSIC_ICON_URLS: dict[str, str] = {
    ".mp3": MUSIC_ICON_URL,
    ".flac": "https://cdn-icons-png.flaticon.com/128/14391/14391198.png",
}
ICON_ROUTE = "/icons"

# ── Catalog ──────────────────────────────────────────────────────
ROOT_PATH = "."
HIDDEN_PREFIX = "."
DEFAULT_PAGE_SIZE = 100
MODE_ON_DEMAND = "on_demand"
MODE_BACKGROUND = "background"
CATALOG_MODES = frozenset({MODE_ON_DEMAND, MODE_BACKGROUND})

# ── TMDB ─────────────────────────────────────────────────────────
TMDB_API_BASE = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/"
TMDB_DEFAULT_IMAGE_SIZE = "w500"
TMDB_TIMEOUT_SECONDS = 10

# ── Icon extraction ──────────────────────────────────────────────
ICON_TIMEOUT_SECONDS = 15

# ── Logging ──────────────────────────────────────────────────────
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB per log file
LOG_BACKUP_COUNT = 5
