"""Catalog data records shared by the scanner, processors and HTTP layer."""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict


@dataclass(frozen=True)
class Library:
    """A configured, named root directory exposed for browsing."""

    id: int
    name: str
    type: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass
class CatalogEntry:
    """One file or directory after classification and enrichment.

    ``relative_path`` is the identity key within a library.  ``extra`` is
    owned by the processors and never read by the scanner.
    """

    name: str
    relative_path: str
    absolute_path: str
    parent: str
    is_directory: bool
    library_id: int = 0
    size_bytes: int = 0
    permission_bits: int = 0
    last_modified: int = 0
    media_type: str = ""
    extension: str = ""
    icon_url: str = ""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    hidden: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def copy(self) -> "CatalogEntry":
        """Return an independent copy safe to enrich at serve time."""
        return replace(self, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        """Serialise for the JSON API; the absolute path stays server-side."""
        d = asdict(self)
        d.pop("absolute_path")
        return d
