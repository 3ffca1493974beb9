"""
Catalog service: the façade the HTTP layer talks to.

Resolves a library by index and lists one of its directories, either by
reading the filesystem per request (``on_demand``) or by filtering the
in-memory index built by the background walk (``background``).
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..clients import ApkIconExtractor, TMDBClient
from ..config import load_libraries
from ..constants import (
    DEFAULT_ICON_CACHE_DIR,
    DEFAULT_PAGE_SIZE,
    ICON_TIMEOUT_SECONDS,
    MODE_BACKGROUND,
    MODE_ON_DEMAND,
    ROOT_PATH,
    TMDB_DEFAULT_IMAGE_SIZE,
    TMDB_TIMEOUT_SECONDS,
)
from ..exceptions import LibraryNotFound
from ..models import CatalogEntry, Library
from ..processors import build_registry
from ..utils import setup_logger
from .catalog_index import BackgroundIndexer, CatalogIndex
from .directory_scanner import DirectoryScanner


def paginate(
    items: Sequence,
    page: Any = 1,
    page_size: Any = None,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> list:
    """Slice *items* for a 1-based page.

    ``page`` below 1 is treated as 1.  A missing, unparseable or
    non-positive ``page_size`` becomes *default_size*.  An offset past the
    end yields an empty list.
    """
    page = _to_int(page, 1)
    page_size = _to_int(page_size, default_size)
    if page < 1:
        page = 1
    if page_size < 1:
        page_size = default_size
    offset = (page - 1) * page_size
    return list(items[offset : offset + page_size])


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class CatalogService:
    """Library listings and single-entry lookups."""

    def __init__(
        self,
        libraries: List[Library],
        scanner: DirectoryScanner,
        *,
        mode: str = MODE_ON_DEMAND,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if mode not in (MODE_ON_DEMAND, MODE_BACKGROUND):
            raise ValueError(f"Unknown catalog mode: {mode}")
        self._libraries = list(libraries)
        self.scanner = scanner
        self.mode = mode
        self.page_size = page_size if page_size and page_size > 0 else DEFAULT_PAGE_SIZE
        self.logger = setup_logger("catalog_service", "catalog.log")

        self.indexes: Dict[int, CatalogIndex] = {}
        self._indexers: Dict[int, BackgroundIndexer] = {}
        if mode == MODE_BACKGROUND:
            for library in self._libraries:
                index = CatalogIndex(library)
                self.indexes[library.id] = index
                self._indexers[library.id] = BackgroundIndexer(scanner, index)

        self.logger.info(
            "CatalogService initialized: %d libraries, mode=%s", len(self._libraries), mode
        )

    @property
    def libraries(self) -> List[Library]:
        return list(self._libraries)

    def get_library(self, library_index: Any) -> Library:
        """Look a library up by index.

        Raises:
            LibraryNotFound: For non-integer or out-of-range indexes.
        """
        try:
            index = int(library_index)
        except (TypeError, ValueError):
            raise LibraryNotFound(library_index) from None
        if index < 0 or index >= len(self._libraries):
            raise LibraryNotFound(library_index)
        return self._libraries[index]

    # ── Background indexing ──────────────────────────────────────

    def start_background_index(self) -> None:
        """Start one walk thread per library; no-op in on-demand mode."""
        for indexer in self._indexers.values():
            indexer.start()

    def wait_for_index(self, timeout: Optional[float] = None) -> bool:
        """Block until every walk finished (or *timeout* per library)."""
        return all(indexer.join(timeout) for indexer in self._indexers.values())

    def index_status(self) -> Dict[str, Any]:
        libraries = []
        for library in self._libraries:
            status: Dict[str, Any] = {"id": library.id, "name": library.name}
            index = self.indexes.get(library.id)
            if index is not None:
                status["entries"] = len(index)
                status["complete"] = index.completed.is_set()
            libraries.append(status)
        return {"mode": self.mode, "libraries": libraries}

    # ── Queries ──────────────────────────────────────────────────

    def list_library_path(
        self,
        library_index: Any,
        relative_path: str = "",
        include_hidden: bool = False,
        page: Any = 1,
        page_size: Any = None,
    ) -> List[CatalogEntry]:
        """List one directory level of a library.

        Paging applies in background mode only; on-demand listings return
        the whole directory.

        Raises:
            LibraryNotFound: Bad library index.
            PathNotAccessible: The directory cannot be read.
        """
        library = self.get_library(library_index)
        if self.mode == MODE_BACKGROUND:
            return self._list_indexed(library, relative_path, include_hidden, page, page_size)
        return self._list_on_demand(library, relative_path, include_hidden)

    def get_entry(self, library_index: Any, relative_path: str) -> CatalogEntry:
        """Return one enriched entry.

        Raises:
            LibraryNotFound: Bad library index.
            PathNotAccessible: The path cannot be stat'ed.
        """
        library = self.get_library(library_index)
        entry = self.scanner.stat_entry(library, relative_path)
        return self.scanner.enrich(entry)

    # ── Private helpers ──────────────────────────────────────────

    def _list_on_demand(
        self, library: Library, relative_path: str, include_hidden: bool
    ) -> List[CatalogEntry]:
        entries = []
        for entry in self.scanner.list_directory(library, relative_path):
            if entry.hidden and not include_hidden:
                continue
            entries.append(self.scanner.enrich(entry))
        return entries

    def _list_indexed(
        self,
        library: Library,
        relative_path: str,
        include_hidden: bool,
        page: Any,
        page_size: Any,
    ) -> List[CatalogEntry]:
        rel, _ = self.scanner.resolve(library, relative_path)
        index = self.indexes[library.id]
        children = index.children(rel)
        # Directories the walk has not descended into (symlinked, or not
        # reached yet) are read live.
        live = not children and not _walked(index, rel)
        if live:
            children = self.scanner.list_directory(library, rel)

        if not include_hidden:
            children = [e for e in children if not e.hidden]
        page_entries = paginate(children, page, page_size, default_size=self.page_size)
        if live:
            return [self.scanner.enrich(e) for e in page_entries]
        return [self.scanner.describe(e.copy()) for e in page_entries]


def _walked(index: CatalogIndex, relative_path: str) -> bool:
    """True if the background walk has listed *relative_path* as a directory."""
    if relative_path == ROOT_PATH:
        return os.path.isdir(index.library.path)
    entry = index.find(relative_path)
    return (
        entry is not None
        and entry.is_directory
        and not os.path.islink(entry.absolute_path)
    )


def build_catalog_service(config: Dict[str, Any]) -> CatalogService:
    """Wire clients, processors, scanner and libraries from a config dict."""
    catalog_conf = config.get("catalog", {})
    tmdb_conf = config.get("tmdb", {})

    tmdb_client = TMDBClient(
        api_key=tmdb_conf.get("api_key") or None,
        timeout=tmdb_conf.get("timeout_seconds", TMDB_TIMEOUT_SECONDS),
        language=tmdb_conf.get("language") or None,
        image_size=tmdb_conf.get("image_size", TMDB_DEFAULT_IMAGE_SIZE),
    )
    registry = build_registry(
        tmdb_client,
        ApkIconExtractor(),
        Path(catalog_conf.get("icon_cache_dir") or DEFAULT_ICON_CACHE_DIR),
        icon_timeout=catalog_conf.get("icon_timeout_seconds", ICON_TIMEOUT_SECONDS),
    )
    return CatalogService(
        load_libraries(config),
        DirectoryScanner(registry),
        mode=catalog_conf.get("mode", MODE_ON_DEMAND),
        page_size=catalog_conf.get("page_size", DEFAULT_PAGE_SIZE),
    )
