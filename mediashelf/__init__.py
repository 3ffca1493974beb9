"""
MediaShelf - browse media libraries with TMDB and package-icon enrichment
"""

__version__ = "0.1.0"

from .models import CatalogEntry, Library
from .services import CatalogService, build_catalog_service
from .web_server import CatalogServer

__all__ = [
    "CatalogEntry",
    "Library",
    "CatalogService",
    "CatalogServer",
    "build_catalog_service",
]
