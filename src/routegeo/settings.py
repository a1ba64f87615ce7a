"""
Settings bootstrap for routegeo.

Geometry constants (precision, earth radius) are fixed in `routegeo.constants` and are
not configurable. Settings only cover the runtime around the kernel: where logs go, how
verbose they are, and how many candidates the batch ranker keeps.
"""

from __future__ import annotations

# Standard library imports keep bootstrap logic portable.
import os
# `Path` makes path handling cross-platform.
from pathlib import Path
# `Any` because YAML is dynamic.
from typing import Any, Optional

# PyYAML parses the human-editable config file.
import yaml

# Logging is configured during bootstrap so later modules can rely on it.
from routegeo.log import configure_logging

DEFAULT_SETTINGS: dict[str, Any] = {
    "project": {
        "logs_dir": "logs",
        "log_level": "INFO",
    },
    "ranking": {
        "max_candidates": 10,
        "id_col": "id",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # Copy so the caller's mapping (often DEFAULT_SETTINGS) is never mutated.
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        # Merge nested mappings so a config file only needs to list what it changes.
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    # A missing config file means "use defaults".
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        # `safe_load` never constructs arbitrary Python objects from tags.
        data = yaml.safe_load(f) or {}
    # Settings must be a mapping; a list or scalar is a broken file.
    if not isinstance(data, dict):
        raise ValueError(f"YAML must be a mapping: {path}")
    return data


def _load_dotenv_if_present(dotenv_path: Path) -> None:
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        # Skip blanks, comments and anything that is not KEY=VALUE.
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        # Never override a variable that is already set in the environment.
        os.environ.setdefault(key, value)


def _resolve_project_root(config_path: Path) -> Path:
    config_dir = config_path.resolve().parent
    # config/default.yaml lives one level below the project root.
    if config_dir.name == "config":
        return config_dir.parent
    return config_dir


def load_settings(config_path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load built-in defaults merged with an optional YAML file, then configure logging.

    `ROUTEGEO_LOG_LEVEL` in the environment (or a `.env` beside the project root)
    overrides the configured log level.
    """
    if config_path is None:
        root = Path.cwd()
        override: dict[str, Any] = {}
        resolved = None
    else:
        resolved = Path(config_path).resolve()
        root = _resolve_project_root(resolved)
        override = _load_yaml(resolved)

    # Load `.env` before reading the environment so it can supply the log level.
    _load_dotenv_if_present(root / ".env")

    settings = _deep_merge(DEFAULT_SETTINGS, override)
    project = settings["project"]

    log_level = os.environ.get("ROUTEGEO_LOG_LEVEL", project.get("log_level", "INFO"))
    logs_dir = root / project.get("logs_dir", "logs")
    logger = configure_logging(logs_dir, level=str(log_level))

    settings["_meta"] = {"config_path": str(resolved) if resolved is not None else None}
    settings["paths"] = {"root": str(root), "logs_dir": str(logs_dir)}
    logger.info("Loaded settings: config=%s", resolved)
    return settings
