"""
Module 05 - API Dependencies

Resolves the commitment settings for a request: server configuration
first, then per-request overrides.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from api.models.requests import MerkleOptions
from core.config.runtime import MerkleConfig, RuntimeConfig, get_default_config


logger = logging.getLogger(__name__)


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a YAML file, then overlay environment variables.

    Search order for config file:
      1. ./whitelist.yaml
      2. ~/.config/whitelist/config.yaml

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "whitelist.yaml",
        Path.home() / ".config" / "whitelist" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            logger.info(f"Loaded config from {path}")
            return RuntimeConfig.from_yaml(path).with_env_overrides()

    return get_default_config()


def get_merkle_config(
    options: MerkleOptions,
    sort_leaves: bool | None = None,
) -> MerkleConfig:
    """Merge request-level options over the server's MerkleConfig."""
    base = load_runtime_config().merkle

    overrides: dict[str, Any] = {}
    if options.hash_function:
        overrides["hash_function"] = options.hash_function
    if options.codec:
        overrides["codec"] = options.codec
    if sort_leaves is not None:
        overrides["sort_leaves"] = sort_leaves

    return replace(base, **overrides)
