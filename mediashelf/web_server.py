"""
Web server exposing the media catalog as a JSON API.
"""

from pathlib import Path
from typing import Any, Dict

from flask import Flask, jsonify

from .config import load_config
from .constants import DEFAULT_ICON_CACHE_DIR, MODE_BACKGROUND
from .routes import catalog_bp
from .services.catalog_service import CatalogService, build_catalog_service
from .utils import setup_logger


class CatalogServer:
    """Flask application around a :class:`CatalogService`."""

    def __init__(
        self,
        config: Dict[str, Any] = None,
        *,
        config_path: str = None,
        catalog: CatalogService = None,
    ):
        """Initialise the Flask web server.

        Args:
            config: Pre-loaded configuration dict (preferred).
            config_path: Path to the JSON config file.
            catalog: Optional pre-built catalog service (tests inject
                one with stub collaborators).
        """
        self.config = config if config is not None else load_config(config_path or "config.json")
        debug_mode = self.config.get("logging", {}).get("debug", False)
        self.logger = setup_logger("web_server", "web_server.log", debug=debug_mode)

        self.catalog = catalog or build_catalog_service(self.config)
        self.icon_cache_dir = Path(
            self.config.get("catalog", {}).get("icon_cache_dir") or DEFAULT_ICON_CACHE_DIR
        )

        self.app = Flask(__name__)
        self.app.json.sort_keys = False
        self._setup_error_handlers()
        self._register_blueprints()

        self.logger.info("CatalogServer initialized (%s mode)", self.catalog.mode)

    def _setup_error_handlers(self):
        @self.app.errorhandler(404)
        def _handle_404(exc):
            return jsonify({"error": "Not found"}), 404

        @self.app.errorhandler(Exception)
        def _handle_exception(exc: Exception):
            from werkzeug.exceptions import HTTPException

            # Let Flask handle HTTP exceptions (400, 405, etc.) normally
            if isinstance(exc, HTTPException):
                return exc
            self.logger.exception("Unhandled error: %s", exc)
            return jsonify({"error": "Internal Server Error"}), 500

    def _register_blueprints(self):
        """Register Blueprints and expose server on app."""
        self.app.config["server"] = self
        self.app.register_blueprint(catalog_bp)

    # ── Server Start ─────────────────────────────────────────────

    def run(self, host: str = None, port: int = None):
        """Start background indexing (if enabled) and serve requests."""
        host = host or self.config["web_server"]["host"]
        port = port or self.config["web_server"]["port"]

        if self.catalog.mode == MODE_BACKGROUND:
            self.catalog.start_background_index()

        self.logger.info("Starting web server on %s:%s", host, port)

        print("\n🌐 MediaShelf starting...")
        for library in self.catalog.libraries:
            print(f"📚 [{library.id}] {library.name}: {library.path}")
        print(f"🔗 URL: http://{host if host != '0.0.0.0' else 'localhost'}:{port}")
        print(f"🗂  Mode: {self.catalog.mode}")
        print("\nPress Ctrl+C to stop\n")

        self.app.run(host=host, port=int(port), debug=False, threaded=True)
