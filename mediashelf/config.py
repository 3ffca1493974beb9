"""
Configuration loading and validation for MediaShelf.

Centralises config parsing so it happens once at startup rather than
redundantly in every component constructor.
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List

from .constants import CATALOG_MODES, DEFAULT_CONFIG_PATH
from .models import Library

# Required top-level keys and the sub-keys that must exist within them.
_REQUIRED_SCHEMA: Dict[str, List[str]] = {
    "web_server": ["host", "port"],
    "catalog": ["mode"],
}

# Keys that must exist at the top level but need no sub-key validation.
_REQUIRED_TOP_KEYS: List[str] = [
    "web_server",
    "catalog",
    "libraries",
]


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from a JSON file and resolve ``${ENV_VAR:-default}``
    placeholders in all string values.

    Args:
        config_path: Path to the config file (relative to project root,
            or absolute)

    Returns:
        Fully-resolved configuration dictionary.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    base_dir = Path(__file__).parent.parent
    full_path = base_dir / config_path

    if not full_path.exists():
        raise ConfigError(f"Configuration file not found: {full_path}")

    try:
        with open(full_path, "r") as f:
            config = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {full_path}: {exc}") from exc

    if not isinstance(config, dict):
        raise ConfigError(f"Top-level JSON value in {full_path} must be an object")

    return _resolve(config)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate a config dict against the required schema.

    Returns:
        A list of human-readable error strings.  Empty means valid.
    """
    errors: List[str] = []

    for key in _REQUIRED_TOP_KEYS:
        if key not in config:
            errors.append(f"Missing required config section: '{key}'")

    for section, sub_keys in _REQUIRED_SCHEMA.items():
        if section not in config:
            continue  # already reported above
        for sub in sub_keys:
            if sub not in config[section]:
                errors.append(f"Missing required key '{sub}' in config section '{section}'")

    mode = config.get("catalog", {}).get("mode")
    if mode is not None and mode not in CATALOG_MODES:
        errors.append(
            f"catalog.mode must be one of {sorted(CATALOG_MODES)}, got '{mode}'"
        )

    libraries = config.get("libraries")
    if libraries is not None:
        if not isinstance(libraries, list):
            errors.append("'libraries' must be a list")
        else:
            for i, lib in enumerate(libraries):
                if not isinstance(lib, dict):
                    errors.append(f"libraries[{i}] must be an object")
                    continue
                path = lib.get("path", "")
                if not path:
                    errors.append(f"libraries[{i}] is missing 'path'")
                elif path.startswith("${"):
                    errors.append(
                        f"libraries[{i}].path is an unresolved placeholder: '{path}'"
                    )

    return errors


def load_libraries(config: Dict[str, Any]) -> List[Library]:
    """Build the immutable library list from the ``libraries`` section.

    The library id is its index in the configured list.
    """
    libraries: List[Library] = []
    for index, lib in enumerate(config.get("libraries", [])):
        root = Path(os.path.expanduser(lib["path"])).absolute()
        libraries.append(
            Library(
                id=index,
                name=lib.get("name") or root.name,
                type=lib.get("type", ""),
                path=str(root),
            )
        )
    return libraries


# ── Private helpers ──────────────────────────────────────────────

_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _resolve(obj: Any) -> Any:
    """Recursively resolve ``${ENV_VAR:-default}`` in string values."""
    if isinstance(obj, str):
        return _PLACEHOLDER_RE.sub(_replace_match, obj)
    elif isinstance(obj, dict):
        return {k: _resolve(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_resolve(v) for v in obj]
    return obj


def _replace_match(m: re.Match) -> str:
    var = m.group(1)
    default = m.group(2) if m.group(2) is not None else ""
    return os.environ.get(var, default)
