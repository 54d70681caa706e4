"""
Module 04 - CLI Verify Command

Verify an inclusion proof offline against a published root. Needs no
whitelist file: only the claim, the proof and the root.

Usage:
    whitelist verify --address 0x5B38... --amount 1 --root 0x... --proof 0x... 0x...
    whitelist verify --leaf 0x... --root 0x... --proof 0x...
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import WhitelistException
from core.whitelist.address import normalize_address
from whitelist_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_json,
    report_error,
    resolve_merkle_config,
    wants_json,
)


logger = logging.getLogger(__name__)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 verified, 2 not verified, 1 bad input)
    """
    as_json = wants_json(args)

    if args.leaf is None and (args.address is None or args.amount is None):
        print("Error: provide --leaf, or both --address and --amount", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    merkle_config = resolve_merkle_config(args)
    siblings = args.proof or []

    try:
        if args.leaf is not None:
            leaf_hex = args.leaf
        else:
            encoder = merkle_config.build_encoder()
            leaf_hex = to_hex(encoder.encode(normalize_address(args.address), args.amount))

        ok = MerkleVerifier.verify_hex(leaf_hex, siblings, args.root, merkle_config.hash_fn)
    except WhitelistException as e:
        return report_error(e, as_json)

    logger.info(f"Verification of {leaf_hex} against {args.root}: {ok}")

    if as_json:
        print_json({
            "ok": ok,
            "leaf": leaf_hex,
            "root": args.root,
            "proof": list(siblings),
        })
    else:
        print(f"leaf: {leaf_hex}")
        print(f"root: {args.root}")
        print(f"verified: {str(ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
