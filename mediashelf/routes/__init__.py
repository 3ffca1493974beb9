"""
Flask Blueprints.

Each blueprint accesses the ``CatalogServer`` instance via
``current_app.config['server']``.
"""

from .catalog_bp import catalog_bp

__all__ = ["catalog_bp"]
