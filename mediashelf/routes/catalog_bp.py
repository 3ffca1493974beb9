"""Catalog routes: libraries, listings, single entries, files and icons."""

from flask import Blueprint, current_app, jsonify, redirect, request, send_file, send_from_directory

from ..constants import ICON_ROUTE
from ..exceptions import LibraryNotFound, PathNotAccessible

catalog_bp = Blueprint("catalog", __name__)


def _server():
    """Return the CatalogServer instance stored on the app."""
    return current_app.config["server"]


def _flag(name: str) -> bool:
    """A query flag is on when present and not ``"false"``."""
    return name in request.args and request.args.get(name, "").lower() != "false"


@catalog_bp.errorhandler(LibraryNotFound)
def _library_not_found(exc):
    return jsonify({"error": str(exc)}), 404


@catalog_bp.errorhandler(PathNotAccessible)
def _path_not_accessible(exc):
    return jsonify({"error": str(exc)}), 404


# ── Catalog API ──────────────────────────────────────────────────


@catalog_bp.route("/api/libraries")
def api_libraries():
    """Return the configured libraries."""
    libraries = [lib.to_dict() for lib in _server().catalog.libraries]
    return jsonify({"count": len(libraries), "libraries": libraries})


@catalog_bp.route("/api/list")
def api_list():
    """List one directory of a library."""
    srv = _server()
    entries = srv.catalog.list_library_path(
        request.args.get("source", "0"),
        request.args.get("path", ""),
        include_hidden=_flag("hidden"),
        page=request.args.get("page", 1),
        page_size=request.args.get("size"),
    )
    items = [e.to_dict() for e in entries]
    return jsonify({"count": len(items), "items": items})


@catalog_bp.route("/api/entry")
def api_entry():
    """Return metadata for a single file or directory."""
    entry = _server().catalog.get_entry(
        request.args.get("source", "0"), request.args.get("path", "")
    )
    return jsonify(entry.to_dict())


@catalog_bp.route("/api/status")
def api_status():
    """Report catalog mode and background indexing progress."""
    return jsonify(_server().catalog.index_status())


# ── Files & icons ────────────────────────────────────────────────


@catalog_bp.route("/view")
def view_file():
    """Serve a library file; the path is confined to the library root."""
    srv = _server()
    library = srv.catalog.get_library(request.args.get("source", "0"))
    rel, absolute = srv.catalog.scanner.resolve(library, request.args.get("path", ""))
    try:
        return send_file(absolute)
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise PathNotAccessible(rel, e.strerror or str(e)) from e


@catalog_bp.route("/icon")
def view_icon():
    """Resolve an entry's icon: redirect remote URLs, serve local ones."""
    entry = _server().catalog.get_entry(
        request.args.get("source", "0"), request.args.get("path", "")
    )
    if entry.icon_url.startswith(("http://", "https://")):
        return redirect(entry.icon_url, code=303)
    if entry.icon_url.startswith("/view"):
        return send_file(entry.absolute_path)
    return redirect(entry.icon_url, code=303)


@catalog_bp.route(f"{ICON_ROUTE}/<path:name>")
def cached_icon(name):
    """Serve an icon extracted into the icon cache directory."""
    return send_from_directory(_server().icon_cache_dir, name, mimetype="image/png")
