"""
Error taxonomy for the catalog pipeline.

``LibraryNotFound`` and ``PathNotAccessible`` reach the HTTP layer.  The
remaining errors describe per-entry enrichment failures and are recovered
inside the pipeline.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class LibraryNotFound(CatalogError):
    """Raised when a library index is outside the configured list."""

    def __init__(self, library_index):
        self.library_index = library_index
        super().__init__(f"Library not found: {library_index}")


class PathNotAccessible(CatalogError):
    """Raised when a library path cannot be read or stat'ed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Path not accessible: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ProviderUnavailable(CatalogError):
    """The external metadata provider failed (network, auth, bad payload)."""


class EmptyMatch(CatalogError):
    """The external metadata provider returned no results."""


class IconFormatError(CatalogError):
    """The package could not be opened or parsed."""


class IconNotFoundError(CatalogError):
    """The package carries no decodable icon."""
