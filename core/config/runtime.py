"""
Runtime Configuration

Central configuration for how whitelist commitments are computed:
hash function, leaf codec, leaf ordering and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import HashFunction, get_hash_function
from core.merkle.leaf_encoder import Codec, LeafEncoder, get_codec

load_dotenv()


@dataclass
class MerkleConfig:
    """Configuration for leaf encoding and tree construction."""
    hash_function: str = "keccak256"
    codec: str = "packed"
    sort_leaves: bool = False

    @property
    def hash_fn(self) -> HashFunction:
        return get_hash_function(self.hash_function)

    @property
    def leaf_codec(self) -> Codec:
        return get_codec(self.codec)

    def build_encoder(self) -> LeafEncoder:
        """LeafEncoder for the configured codec and hash function."""
        return LeafEncoder(codec=self.leaf_codec, hash_fn=self.hash_fn)


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - WHITELIST_HASH_FUNCTION: keccak256 or sha256
        - WHITELIST_CODEC: packed or padded
        - WHITELIST_SORT_LEAVES: sort leaves before building (true/false)
        - WHITELIST_LOG_LEVEL: log level name
        - WHITELIST_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("WHITELIST_HASH_FUNCTION"):
            overrides.setdefault("merkle", {})["hash_function"] = os.getenv("WHITELIST_HASH_FUNCTION")
        if os.getenv("WHITELIST_CODEC"):
            overrides.setdefault("merkle", {})["codec"] = os.getenv("WHITELIST_CODEC")
        if os.getenv("WHITELIST_SORT_LEAVES"):
            overrides.setdefault("merkle", {})["sort_leaves"] = _env_bool(
                os.getenv("WHITELIST_SORT_LEAVES", "false")
            )

        if os.getenv("WHITELIST_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("WHITELIST_LOG_LEVEL")
        if os.getenv("WHITELIST_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv("WHITELIST_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {})
        logging_data = data.get("logging", {})

        merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        # Fail fast on unknown names instead of at first use
        get_hash_function(merkle.hash_function)
        get_codec(merkle.codec)

        return cls(
            merkle=merkle,
            logging=log_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("merkle", {}).items():
            setattr(new_config.merkle, key, value)

        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "hash_function": self.merkle.hash_function,
                "codec": self.merkle.codec,
                "sort_leaves": self.merkle.sort_leaves,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
