#!/usr/bin/env python3
"""
KUBEDISPATCH CONTEXT PROVIDER
-----------------------------
Works out which cluster context commands should target: an explicit
choice first, then the configured one, then kubeconfig's current-context.

Author: KubeDispatch Team
Date: 2026-10-18
"""

import os
import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML, YAMLError

from kubedispatch.core.config import DispatchConfig
from kubedispatch.core.models import ClusterContext

logger = logging.getLogger("kubedispatch.kubeconfig")

DEFAULT_KUBECONFIG = Path("~/.kube/config")


def kubeconfig_path(config: Optional[DispatchConfig] = None) -> Path:
    if config and config.kubeconfig:
        return Path(config.kubeconfig).expanduser()
    env = os.environ.get("KUBECONFIG", "")
    first = next((p for p in env.split(os.pathsep) if p), None)
    return Path(first).expanduser() if first else DEFAULT_KUBECONFIG.expanduser()


def current_context(path: Path) -> Optional[str]:
    """Reads current-context from a kubeconfig. Unreadable files give None."""
    if not path.exists():
        logger.debug(f"No kubeconfig at {path}")
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = YAML(typ="safe").load(f)
    except (OSError, YAMLError) as e:
        logger.warning(f"Unable to read kubeconfig {path}: {e}")
        return None

    if not isinstance(doc, dict):
        return None
    name = doc.get("current-context")
    return str(name) if name else None


def resolve_context(explicit: Optional[str] = None,
                    config: Optional[DispatchConfig] = None) -> Optional[ClusterContext]:
    if explicit:
        return ClusterContext(explicit)
    if config and config.context:
        return ClusterContext(config.context)
    name = current_context(kubeconfig_path(config))
    return ClusterContext(name) if name else None
