"""
Directory scanner service.

Reads library directories into :class:`CatalogEntry` records and runs the
enrichment processors over them.  Listing and walking are kept apart from
enrichment so the catalog service can decide when the slow ``process``
step runs (per request, or once in the background walk).
"""

import os
import posixpath
import stat as stat_module
from typing import Iterator, List, Optional

from werkzeug.security import safe_join

from ..cache import ResultCache
from ..constants import FILE_ICON_URL, FOLDER_ICON_URL, MEDIA_DIRECTORY, MEDIA_FILE, ROOT_PATH
from ..exceptions import CatalogError, PathNotAccessible
from ..models import CatalogEntry, Library
from ..processors.base import ProcessorRegistry
from ..utils import format_size, is_hidden, join_relative, normalize_relative_path, setup_logger


class DirectoryScanner:
    """Builds catalog entries from the filesystem and enriches them."""

    def __init__(self, registry: ProcessorRegistry, processed: Optional[ResultCache] = None):
        """
        Args:
            registry: Processor dispatch used for every non-directory entry.
            processed: Memo of which absolute paths already went through
                ``process``.  A fresh cache is created if omitted.
        """
        self.registry = registry
        self.processed = processed if processed is not None else ResultCache("processed")
        self.logger = setup_logger("directory_scanner", "scanner.log")

    # ── Path resolution ──────────────────────────────────────────

    def resolve(self, library: Library, relative_path: str) -> tuple:
        """Return ``(normalized relative path, absolute path)``.

        Raises:
            PathNotAccessible: If the path leaves the library root.
        """
        try:
            rel = normalize_relative_path(relative_path)
        except ValueError as e:
            raise PathNotAccessible(relative_path, str(e)) from e

        if rel == ROOT_PATH:
            return rel, library.path
        absolute = safe_join(library.path, rel)
        if absolute is None:
            raise PathNotAccessible(relative_path, "outside library root")
        return rel, absolute

    # ── Listing ──────────────────────────────────────────────────

    def list_directory(self, library: Library, relative_path: str) -> List[CatalogEntry]:
        """Read one directory level, in directory-read order, without enrichment.

        Raises:
            PathNotAccessible: If the directory cannot be read.
        """
        rel, absolute = self.resolve(library, relative_path)
        try:
            with os.scandir(absolute) as it:
                dir_entries = list(it)
        except OSError as e:
            raise PathNotAccessible(rel, e.strerror or str(e)) from e

        entries = []
        for dir_entry in dir_entries:
            entry = self._from_dir_entry(library, rel, dir_entry)
            if entry is not None:
                entries.append(entry)
        return entries

    def stat_entry(self, library: Library, relative_path: str) -> CatalogEntry:
        """Build the entry for a single path.

        Raises:
            PathNotAccessible: If the path cannot be stat'ed.
        """
        rel, absolute = self.resolve(library, relative_path)
        try:
            st = os.stat(absolute)
        except OSError as e:
            raise PathNotAccessible(rel, e.strerror or str(e)) from e

        if rel == ROOT_PATH:
            name, parent = library.name, ROOT_PATH
        else:
            name = posixpath.basename(rel)
            parent = posixpath.dirname(rel) or ROOT_PATH
        return self._make_entry(
            library, parent, name, rel, absolute, st, stat_module.S_ISDIR(st.st_mode)
        )

    def walk(self, library: Library) -> Iterator[CatalogEntry]:
        """Yield every entry below the library root, depth first.

        Each directory's entries come out in directory-read order and a
        subdirectory's contents follow right after the subdirectory itself.
        Unreadable directories are logged and skipped.
        """
        yield from self._walk_dir(library, ROOT_PATH)

    def _walk_dir(self, library: Library, relative_dir: str) -> Iterator[CatalogEntry]:
        try:
            entries = self.list_directory(library, relative_dir)
        except PathNotAccessible as e:
            self.logger.warning("Skipping directory in %s: %s", library.name, e)
            return

        for entry in entries:
            yield entry
            # Symlinked directories are listed but not followed (cycles).
            if entry.is_directory and not os.path.islink(entry.absolute_path):
                yield from self._walk_dir(library, entry.relative_path)

    # ── Enrichment ───────────────────────────────────────────────

    def process(self, entry: CatalogEntry) -> bool:
        """Run the entry's processor once per absolute path.

        Failures are logged and remembered; they never propagate.

        Returns:
            True if processing succeeded (now or earlier).
        """
        if entry.is_directory:
            return True
        processor = self.registry.select(entry.name)
        return self.processed.get_or_compute(
            entry.absolute_path, lambda: self._run_processor(processor.process, entry)
        )

    def describe(self, entry: CatalogEntry) -> CatalogEntry:
        """Project stored enrichment results onto *entry* (in place)."""
        if not entry.is_directory:
            processor = self.registry.select(entry.name)
            processor.describe(entry.absolute_path, entry)
        return entry

    def enrich(self, entry: CatalogEntry) -> CatalogEntry:
        """``process`` then ``describe``; the on-demand path."""
        self.process(entry)
        return self.describe(entry)

    def _run_processor(self, process, entry: CatalogEntry) -> bool:
        try:
            process(entry.absolute_path)
            return True
        except CatalogError as e:
            self.logger.warning("Enrichment skipped for %s: %s", entry.relative_path, e)
        except Exception:
            self.logger.exception("Unexpected enrichment failure for %s", entry.relative_path)
        return False

    # ── Entry construction ───────────────────────────────────────

    def _from_dir_entry(
        self, library: Library, parent: str, dir_entry: os.DirEntry
    ) -> Optional[CatalogEntry]:
        rel = join_relative(parent, dir_entry.name)
        try:
            st = dir_entry.stat()
            is_dir = dir_entry.is_dir()
        except OSError:
            # Dangling symlink: describe the link itself.
            try:
                st = dir_entry.stat(follow_symlinks=False)
            except OSError as e:
                self.logger.warning("Cannot stat %s: %s", dir_entry.path, e)
                return None
            is_dir = False
        return self._make_entry(library, parent, dir_entry.name, rel, dir_entry.path, st, is_dir)

    @staticmethod
    def _make_entry(
        library: Library,
        parent: str,
        name: str,
        relative_path: str,
        absolute_path: str,
        st: os.stat_result,
        is_dir: bool,
    ) -> CatalogEntry:
        entry = CatalogEntry(
            name=name,
            relative_path=relative_path,
            absolute_path=absolute_path,
            parent=parent,
            is_directory=is_dir,
            library_id=library.id,
            size_bytes=st.st_size,
            permission_bits=stat_module.S_IMODE(st.st_mode),
            last_modified=int(st.st_mtime),
            hidden=is_hidden(name),
        )
        if is_dir:
            entry.media_type = MEDIA_DIRECTORY
            entry.icon_url = FOLDER_ICON_URL
        else:
            entry.media_type = MEDIA_FILE
            entry.extension = os.path.splitext(name)[1].lower()
            entry.icon_url = FILE_ICON_URL
            entry.line1 = format_size(st.st_size)
        return entry
