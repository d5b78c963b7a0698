"""YAML data file loader for per-year tax parameter tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    Args:
        path: Absolute or relative path to the YAML file.

    Returns:
        Parsed YAML content (typically a dict or list).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    logger.debug("Loading YAML from %s", path)
    with open(path) as f:
        return yaml.safe_load(f)


def load_package_yaml(relative_path: str) -> Any:
    """Load a YAML file relative to the takehome package root.

    Args:
        relative_path: Path relative to ``src/takehome/``,
            e.g. ``"taxes/tables/uk_2024_25.yaml"``.

    Returns:
        Parsed YAML content.
    """
    return load_yaml(PACKAGE_ROOT / relative_path)


def list_package_yaml(relative_dir: str, pattern: str = "*.yaml") -> list[Path]:
    """List YAML files in a package directory, sorted by name."""
    return sorted((PACKAGE_ROOT / relative_dir).glob(pattern))
