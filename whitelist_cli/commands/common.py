"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from dataclasses import replace
from typing import Any

from core.config.runtime import MerkleConfig
from core.schemas.errors import WhitelistException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_merkle_config(args: Namespace) -> MerkleConfig:
    """
    Merge per-command flags over the loaded CLI configuration.

    Flags left unset (None) keep the configured value.
    """
    cli_config = getattr(args, "cli_config", None)
    base = cli_config.merkle if cli_config is not None else MerkleConfig()

    overrides: dict[str, Any] = {}
    if getattr(args, "hash_function", None):
        overrides["hash_function"] = args.hash_function
    if getattr(args, "codec", None):
        overrides["codec"] = args.codec
    if getattr(args, "sort_leaves", None) is not None:
        overrides["sort_leaves"] = args.sort_leaves

    return replace(base, **overrides)


def wants_json(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    cli_config = getattr(args, "cli_config", None)
    return cli_config is not None and cli_config.default_output_format == "json"


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def report_error(exc: WhitelistException, as_json: bool) -> int:
    """Print a structured error and return the runtime error exit code."""
    if as_json:
        print_json({"ok": False, "error": exc.to_error_model().model_dump()})
    else:
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR
