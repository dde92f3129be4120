#!/usr/bin/env python3
"""
KUBEDISPATCH CONFIGURATION
--------------------------
Loads and persists the user's YAML configuration file. Round-trip mode
is used so comments in the file survive a `kubedispatch set`.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap

from kubedispatch.core.errors import ConfigError
from kubedispatch.dispatch.selection import DEFAULT_SEPARATOR

logger = logging.getLogger("kubedispatch.config")

CONFIG_ENV = "KUBEDISPATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.kubedispatch/config.yaml")

KNOWN_KEYS = ("terminal", "range_separator", "context", "kubeconfig")


@dataclass
class DispatchConfig:
    terminal: Optional[str] = None
    range_separator: str = DEFAULT_SEPARATOR
    context: Optional[str] = None
    kubeconfig: Optional[str] = None


def config_path(explicit: Optional[str] = None) -> Path:
    """--config, then $KUBEDISPATCH_CONFIG, then ~/.kubedispatch/config.yaml."""
    raw = explicit or os.environ.get(CONFIG_ENV)
    path = Path(raw) if raw else DEFAULT_CONFIG_PATH
    return path.expanduser()


def _yaml() -> YAML:
    yaml = YAML(typ="rt")
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _read_document(path: Path) -> CommentedMap:
    if not path.exists():
        return CommentedMap()
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = _yaml().load(f)
    except (OSError, YAMLError) as e:
        raise ConfigError(f"Unable to read config {path}: {e}")

    if doc is None:
        return CommentedMap()
    if not isinstance(doc, dict):
        raise ConfigError(f"Config {path} must be a mapping at the top level")
    return doc


def _check_separator(template: str):
    try:
        template.format(name="pod", namespace="ns", kind="pod", index=0)
    except (KeyError, IndexError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid range_separator '{template}': {e}")


def load_config(path: Optional[str] = None) -> DispatchConfig:
    resolved = config_path(path)
    doc = _read_document(resolved)
    config = DispatchConfig()

    for key, value in doc.items():
        if key not in KNOWN_KEYS:
            logger.warning(f"Ignoring unknown config key '{key}' in {resolved}")
            continue
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' must be a string, got {type(value).__name__}")
        setattr(config, key, value)

    _check_separator(config.range_separator)
    logger.debug(f"Loaded config from {resolved}: {config}")
    return config


def set_config_value(key: str, value: str, path: Optional[str] = None) -> Path:
    """Persists one known key, keeping the rest of the file intact."""
    if key not in KNOWN_KEYS:
        raise ConfigError(f"Unknown config key '{key}'. Known keys: {', '.join(KNOWN_KEYS)}")
    if key == "range_separator":
        _check_separator(value)

    resolved = config_path(path)
    doc = _read_document(resolved)
    doc[key] = value
    _atomic_write(resolved, doc)
    logger.info(f"Set {key} in {resolved}")
    return resolved


def _atomic_write(target_path: Path, doc: CommentedMap):
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_file = target_path.with_suffix(".kubedispatch.tmp")
    try:
        with open(temp_file, "w", encoding="utf-8") as f:
            _yaml().dump(doc, f)
        os.replace(temp_file, target_path)
    except OSError as e:
        if temp_file.exists():
            temp_file.unlink()
        raise ConfigError(f"Unable to write config {target_path}: {e}")
