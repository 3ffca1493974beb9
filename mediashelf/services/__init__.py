"""
Service layer modules.

Catalog logic kept apart from the web/CLI layers.
"""

from .catalog_index import BackgroundIndexer, CatalogIndex
from .catalog_service import CatalogService, build_catalog_service, paginate
from .directory_scanner import DirectoryScanner

__all__ = [
    "BackgroundIndexer",
    "CatalogIndex",
    "CatalogService",
    "DirectoryScanner",
    "build_catalog_service",
    "paginate",
]
