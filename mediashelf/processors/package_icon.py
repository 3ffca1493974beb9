"""
Android package enrichment.

``process`` pulls the launcher icon out of the APK, writes it as PNG into
the icon cache directory under ``md5(absolute path).png`` and remembers the
cache file together with the app label and package id.  Each extraction
runs on its own daemon thread, so a package that hangs is abandoned after
the timeout without holding up any other package.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional

from ..cache import ResultCache
from ..classifier import classify_filename
from ..clients.apk_client import ApkIconExtractor
from ..constants import ICON_ROUTE, ICON_TIMEOUT_SECONDS, MEDIA_PACKAGE
from ..exceptions import IconFormatError
from ..models import CatalogEntry
from ..utils import icon_cache_name, setup_logger
from .base import Processor

# Modes PNG can store without conversion.
_PNG_MODES = frozenset({"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"})


class PackageIconProcessor(Processor):
    """Extract and cache application icons for ``.apk`` files."""

    name = "package"

    def __init__(
        self,
        extractor: ApkIconExtractor,
        cache_dir: Path,
        cache: Optional[ResultCache] = None,
        timeout: float = ICON_TIMEOUT_SECONDS,
    ):
        self.extractor = extractor
        self.cache_dir = Path(cache_dir)
        self.cache = cache if cache is not None else ResultCache("package_icons")
        self.timeout = timeout
        self.logger = setup_logger("package_processor", "processors.log")

    def matches(self, filename: str) -> bool:
        return classify_filename(filename) == MEDIA_PACKAGE

    def process(self, path: str) -> None:
        """Extract the icon once per path.

        Raises:
            IconFormatError: The package cannot be opened or timed out.
            IconNotFoundError: The package has no raster icon.
        """
        self.cache.get_or_compute(path, lambda: self._extract_with_timeout(path))

    def describe(self, path: str, entry: CatalogEntry) -> None:
        entry.media_type = MEDIA_PACKAGE
        result, found = self.cache.get(path)
        if not found:
            return
        entry.icon_url = f"{ICON_ROUTE}/{Path(result['icon_path']).name}"
        entry.line1 = result["label"]
        entry.line2 = result["package"]
        entry.extra["package"] = result["package"]

    # ── Extraction ───────────────────────────────────────────────

    def _extract_with_timeout(self, path: str) -> Dict[str, Any]:
        """Run :meth:`_extract` on a daemon thread and wait up to ``timeout``.

        The clock starts when the thread starts, and a hung thread is left
        behind without blocking other extractions or interpreter exit.
        """
        outcome: Dict[str, Any] = {}

        def run():
            try:
                outcome["result"] = self._extract(path)
            except Exception as e:
                outcome["error"] = e

        worker = threading.Thread(
            target=run, daemon=True, name=f"icon-extract-{Path(path).name}"
        )
        worker.start()
        worker.join(self.timeout)
        if worker.is_alive():
            raise IconFormatError(f"Icon extraction timed out after {self.timeout}s: {path}")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["result"]

    def _extract(self, path: str) -> Dict[str, Any]:
        handle = self.extractor.open(path)
        image = self.extractor.icon(handle)
        if image.mode not in _PNG_MODES:
            image = image.convert("RGBA")

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        cache_path = self.cache_dir / icon_cache_name(path)
        image.save(cache_path, format="PNG")

        label = self.extractor.label(handle)
        package = self.extractor.package_identifier(handle)
        self.logger.info("Extracted icon for %s (%s) -> %s", label or path, package, cache_path.name)
        return {"icon_path": str(cache_path), "label": label, "package": package}
