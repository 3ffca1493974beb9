"""Processor capability and the ordered registry that dispatches to it."""

from typing import Iterable, List

from ..models import CatalogEntry


class Processor:
    """
    Enrichment capability for one kind of file.

    ``process`` does the slow work (network, extraction) and remembers the
    outcome by absolute path.  ``describe`` only projects that outcome onto
    an entry and must stay cheap: it runs on every listing.
    """

    name: str = "base"

    def matches(self, filename: str) -> bool:
        return False

    def process(self, path: str) -> None:
        """Compute and store enrichment for *path*; may raise."""

    def describe(self, path: str, entry: CatalogEntry) -> None:
        """Fill display fields of *entry* from stored results."""


class ProcessorRegistry:
    """Ordered processors; the first one that matches a filename wins.

    *fallback* handles everything no other processor claims, so
    :meth:`select` always returns a processor.
    """

    def __init__(self, processors: Iterable[Processor], fallback: Processor):
        self._processors: List[Processor] = list(processors)
        self.fallback = fallback

    def select(self, filename: str) -> Processor:
        for processor in self._processors:
            if processor.matches(filename):
                return processor
        return self.fallback

    def processors(self) -> List[Processor]:
        return self._processors + [self.fallback]
