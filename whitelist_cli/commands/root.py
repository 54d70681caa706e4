"""
Module 04 - CLI Root Command

Build the Merkle tree for a whitelist file and print its root.

Usage:
    whitelist root whitelist.json [--layers] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.schemas.errors import WhitelistException
from core.whitelist.commitment import WhitelistCommitment
from core.whitelist.loader import load_whitelist
from whitelist_cli.commands.common import (
    EXIT_SUCCESS,
    print_json,
    report_error,
    resolve_merkle_config,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_root_human(commitment: WhitelistCommitment, show_layers: bool) -> None:
    """Print the commitment in human-readable format."""
    data = commitment.to_dict()
    print(f"root: {data['root']}")
    print(f"entries: {data['leaf_count']}")
    print(f"depth: {data['depth']}")
    print(f"hash_function: {data['hash_function']}")
    print(f"codec: {data['codec']}")
    print(f"sort_leaves: {str(data['sort_leaves']).lower()}")

    if show_layers:
        for level, layer in enumerate(commitment.tree.hex_layers()):
            print(f"\nlayer {level} ({len(layer)} nodes):")
            for node in layer:
                print(f"  {node}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    as_json = wants_json(args)

    try:
        whitelist = load_whitelist(args.whitelist)
        commitment = WhitelistCommitment(whitelist, config=resolve_merkle_config(args))
    except WhitelistException as e:
        return report_error(e, as_json)

    if as_json:
        data = commitment.to_dict()
        if args.layers:
            data["layers"] = commitment.tree.hex_layers()
        print_json(data)
    else:
        print_root_human(commitment, args.layers)

    return EXIT_SUCCESS
