"""
Utility functions for the MediaShelf catalog
"""

import hashlib
import logging
import posixpath
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

from .constants import HIDDEN_PREFIX, LOG_BACKUP_COUNT, LOG_MAX_BYTES, ROOT_PATH

load_dotenv()


def setup_logger(name: str, log_file: str, level=None, debug: bool = False) -> logging.Logger:
    """
    Setup a logger with file and console output

    Args:
        name: Logger name
        log_file: Log file path
        level: Logging level (overrides debug flag if provided)
        debug: If True, set level to DEBUG

    Returns:
        Configured logger
    """
    if level is None:
        level = logging.DEBUG if debug else logging.INFO

    base_dir = Path(__file__).parent.parent
    log_path = base_dir / "logs" / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Formatter: include function name in debug mode
    if debug:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    else:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def format_size(size_bytes: int) -> str:
    """
    Format byte size to human-readable string

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.50 GB")
    """
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


def icon_cache_name(file_path: str) -> str:
    """Return the stable cache filename for an icon extracted from *file_path*.

    Args:
        file_path: Absolute path of the source package

    Returns:
        ``<md5 hex>.png``
    """
    return hashlib.md5(file_path.encode("utf-8")).hexdigest() + ".png"


def is_hidden(name: str) -> bool:
    """True for dot-files and dot-directories."""
    return name.startswith(HIDDEN_PREFIX)


def normalize_relative_path(path: str) -> str:
    """
    Normalise a library-relative path coming from a request.

    Backslashes become slashes, leading slashes are dropped and an empty
    path becomes the root sentinel ``"."``.

    Raises:
        ValueError: If the path climbs out of the library root or holds
            a NUL byte.
    """
    path = (path or "").strip().replace("\\", "/").lstrip("/")
    if "\x00" in path:
        raise ValueError("Path contains a NUL byte")
    if not path:
        return ROOT_PATH
    path = posixpath.normpath(path)
    if path == ".." or path.startswith("../"):
        raise ValueError(f"Path escapes library root: {path}")
    return path


def join_relative(parent: str, name: str) -> str:
    """Join a directory-relative path and an entry name."""
    if parent == ROOT_PATH:
        return name
    return posixpath.join(parent, name)
