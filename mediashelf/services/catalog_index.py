"""
In-memory catalog for background-index mode.

One :class:`BackgroundIndexer` thread per library walks the tree once,
appending entries to a :class:`CatalogIndex` and running each file's
processor as it goes.  Requests read the index concurrently and see
whatever has been appended so far.
"""

import threading
import time
from typing import Dict, List, Optional

from ..models import CatalogEntry, Library
from ..utils import setup_logger
from .directory_scanner import DirectoryScanner


class CatalogIndex:
    """Append-only entry store for one library.

    Appends and reads share one lock; readers always get a copy, so they
    see the index either before or after an append.
    """

    def __init__(self, library: Library):
        self.library = library
        self.completed = threading.Event()
        self._entries: List[CatalogEntry] = []
        self._by_parent: Dict[str, List[CatalogEntry]] = {}
        self._by_path: Dict[str, CatalogEntry] = {}
        self._lock = threading.Lock()

    def append(self, entry: CatalogEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            self._by_parent.setdefault(entry.parent, []).append(entry)
            self._by_path[entry.relative_path] = entry

    def children(self, parent: str) -> List[CatalogEntry]:
        """Entries directly inside *parent*, in walk order."""
        with self._lock:
            return list(self._by_parent.get(parent, ()))

    def find(self, relative_path: str) -> Optional[CatalogEntry]:
        with self._lock:
            return self._by_path.get(relative_path)

    def snapshot(self) -> List[CatalogEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class BackgroundIndexer:
    """Walks one library into a :class:`CatalogIndex` on a daemon thread."""

    def __init__(self, scanner: DirectoryScanner, index: CatalogIndex):
        self.scanner = scanner
        self.index = index
        self.logger = setup_logger("catalog_indexer", "scanner.log")
        self._thread: Optional[threading.Thread] = None

    def start(self) -> threading.Thread:
        if self._thread is None:
            self._thread = threading.Thread(
                target=self.run,
                daemon=True,
                name=f"catalog-index-{self.index.library.id}",
            )
            self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the walk; True once it has completed."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.index.completed.is_set()

    def run(self) -> None:
        library = self.index.library
        self.logger.info("Indexing library '%s' at %s", library.name, library.path)
        started = time.monotonic()
        processed = failed = 0
        try:
            for entry in self.scanner.walk(library):
                self.index.append(entry)
                if entry.is_directory:
                    continue
                if self.scanner.process(entry):
                    processed += 1
                else:
                    failed += 1
        except Exception:
            self.logger.exception("Indexing of library '%s' aborted", library.name)
        finally:
            self.index.completed.set()
            self.logger.info(
                "Indexed library '%s': %d entries, %d enriched, %d failed in %.1fs",
                library.name,
                len(self.index),
                processed,
                failed,
                time.monotonic() - started,
            )
