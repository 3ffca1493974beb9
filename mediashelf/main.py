"""
Command-line entry point: load config, build the catalog, serve it.
"""

import argparse
import sys

from .config import ConfigError, load_config, validate_config
from .constants import CATALOG_MODES, DEFAULT_CONFIG_PATH
from .utils import setup_logger
from .web_server import CatalogServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse media libraries over HTTP")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to config file")
    parser.add_argument("--host", help="Host address")
    parser.add_argument("--port", type=int, help="Port number")
    parser.add_argument(
        "--mode",
        choices=sorted(CATALOG_MODES),
        help="Override catalog.mode from the config",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger("main", "mediashelf.log", debug=args.debug)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    if args.mode:
        config.setdefault("catalog", {})["mode"] = args.mode
    if args.debug:
        config.setdefault("logging", {})["debug"] = True

    errors = validate_config(config)
    if errors:
        for err in errors:
            logger.error("Config error: %s", err)
        return 1

    server = CatalogServer(config)
    try:
        server.run(host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
