"""
Module 04 - CLI Configuration

Configuration management for the whitelist CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from core.config.runtime import MerkleConfig


# Environment variable prefix
ENV_PREFIX = "WHITELIST_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Commitment settings
    merkle: MerkleConfig = field(default_factory=MerkleConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    if os.getenv(f"{ENV_PREFIX}HASH_FUNCTION"):
        config.merkle.hash_function = os.getenv(f"{ENV_PREFIX}HASH_FUNCTION", "keccak256")
    if os.getenv(f"{ENV_PREFIX}CODEC"):
        config.merkle.codec = os.getenv(f"{ENV_PREFIX}CODEC", "packed")
    if os.getenv(f"{ENV_PREFIX}SORT_LEAVES"):
        config.merkle.sort_leaves = _env_bool(f"{ENV_PREFIX}SORT_LEAVES")

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    merkle_data = data.get("merkle", {})
    config.merkle = MerkleConfig(
        hash_function=merkle_data.get("hash_function", config.merkle.hash_function),
        codec=merkle_data.get("codec", config.merkle.codec),
        sort_leaves=merkle_data.get("sort_leaves", config.merkle.sort_leaves),
    )

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get("default_output_format", config.default_output_format)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path and config_path.exists():
        config = load_config_from_file(config_path)

    default_paths = [
        Path.cwd() / "whitelist.config.json",
        Path.cwd() / ".whitelist.json",
        Path.home() / ".config" / "whitelist" / "config.json",
    ]

    if config_path is None:
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    # Env takes precedence over file
    if os.getenv(f"{ENV_PREFIX}HASH_FUNCTION"):
        config.merkle.hash_function = env_config.merkle.hash_function
    if os.getenv(f"{ENV_PREFIX}CODEC"):
        config.merkle.codec = env_config.merkle.codec
    if os.getenv(f"{ENV_PREFIX}SORT_LEAVES"):
        config.merkle.sort_leaves = env_config.merkle.sort_leaves
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = env_config.default_output_format

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "merkle": {
    "hash_function": "keccak256",
    "codec": "packed",
    "sort_leaves": false
  },
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""
