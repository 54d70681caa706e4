"""
Module 04 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m whitelist_cli root <whitelist_file> [--layers] [--json]
    python -m whitelist_cli proof <whitelist_file> (--index N | --address ADDR [--amount N] | --all) [--json]
    python -m whitelist_cli verify (--leaf HEX | --address ADDR --amount N) --root HEX --proof HEX... [--json]
    python -m whitelist_cli config --init

Environment Variables:
    WHITELIST_HASH_FUNCTION     keccak256 (default) or sha256
    WHITELIST_CODEC             packed (default) or padded
    WHITELIST_SORT_LEAVES       Sort leaves before building (default: false)
    WHITELIST_LOG_LEVEL         Log level (default: WARNING)
    WHITELIST_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.crypto.hashing import available_hash_functions
from core.merkle.leaf_encoder import available_codecs
from whitelist_cli.commands import proof, root, verify
from whitelist_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from whitelist_cli.config import get_default_config_template, load_config


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_VERIFICATION_FAILED",
    "create_parser",
    "main",
]


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_merkle_options(parser: argparse.ArgumentParser, with_ordering: bool = True) -> None:
    parser.add_argument(
        "--hash-function",
        type=str,
        choices=available_hash_functions(),
        default=None,
        help="Hash function (default: from config, keccak256)",
    )
    parser.add_argument(
        "--codec",
        type=str,
        choices=available_codecs(),
        default=None,
        help="Leaf codec: packed = abi.encodePacked, padded = abi.encode (default: from config, packed)",
    )
    if with_ordering:
        parser.add_argument(
            "--sort-leaves",
            dest="sort_leaves",
            action="store_true",
            default=None,
            help="Sort leaves by hash before building (order-independent root)",
        )
        parser.add_argument(
            "--no-sort-leaves",
            dest="sort_leaves",
            action="store_false",
            help="Keep whitelist file order (default)",
        )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="whitelist",
        description="Whitelist Merkle CLI - Compute roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./whitelist.config.json or ~/.config/whitelist/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a whitelist",
        description="Build the Merkle tree for a whitelist file and print its root.",
    )
    root_parser.add_argument(
        "whitelist",
        type=str,
        help="Whitelist file (.json, .yaml or .yml)",
    )
    root_parser.add_argument(
        "--layers",
        action="store_true",
        default=False,
        help="Also print every tree layer",
    )
    _add_merkle_options(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof",
        description="Generate inclusion proofs for whitelist entries by index or address.",
    )
    proof_parser.add_argument(
        "whitelist",
        type=str,
        help="Whitelist file (.json, .yaml or .yml)",
    )
    target = proof_parser.add_mutually_exclusive_group()
    target.add_argument(
        "--index", "-i",
        type=int,
        default=None,
        help="Leaf index (tree order)",
    )
    target.add_argument(
        "--address", "-a",
        type=str,
        default=None,
        help="Whitelisted address (any letter case)",
    )
    target.add_argument(
        "--all",
        action="store_true",
        default=False,
        help="Proofs for every entry",
    )
    proof_parser.add_argument(
        "--amount",
        type=int,
        default=None,
        help="Pin --address to a specific amount",
    )
    _add_merkle_options(proof_parser)
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
        description="Recompute the root from a leaf and its proof and compare it with the claimed root.",
    )
    verify_parser.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Leaf hash (0x hex); alternative to --address/--amount",
    )
    verify_parser.add_argument(
        "--address", "-a",
        type=str,
        default=None,
        help="Claimed address",
    )
    verify_parser.add_argument(
        "--amount",
        type=int,
        default=None,
        help="Claimed amount",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Published Merkle root (0x hex)",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        nargs="*",
        default=[],
        help="Sibling hashes, leaf to root (0x hex)",
    )
    _add_merkle_options(verify_parser, with_ordering=False)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="whitelist.config.json",
        help="Path for config file (default: whitelist.config.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (WHITELIST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "merkle": {
                "hash_function": config.merkle.hash_function,
                "codec": config.merkle.codec,
                "sort_leaves": config.merkle.sort_leaves,
            },
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: whitelist config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
