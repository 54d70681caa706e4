"""
Module 04 - CLI Proof Command

Generate inclusion proofs from a whitelist file.

Usage:
    whitelist proof whitelist.json --index 2
    whitelist proof whitelist.json --address 0x5B38... [--amount 1]
    whitelist proof whitelist.json --all --json
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.schemas.errors import WhitelistException
from core.whitelist.commitment import EntryProof, WhitelistCommitment
from core.whitelist.loader import load_whitelist
from whitelist_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_json,
    report_error,
    resolve_merkle_config,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_proof_human(entry_proof: EntryProof) -> None:
    data = entry_proof.to_dict()
    print(f"address: {data['address']}")
    print(f"amount: {data['amount']}")
    print(f"index: {data['index']}")
    print(f"leaf: {data['leaf']}")
    print(f"root: {data['root']}")
    print(f"proof ({len(data['proof'])}):")
    for sibling in data["proof"]:
        print(f"  {sibling}")


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    as_json = wants_json(args)

    if not args.all and args.index is None and args.address is None:
        print("Error: one of --index, --address or --all is required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        whitelist = load_whitelist(args.whitelist)
        commitment = WhitelistCommitment(whitelist, config=resolve_merkle_config(args))

        if args.all:
            proofs = commitment.all_proofs()
        elif args.index is not None:
            proofs = [commitment.proof_at(args.index)]
        else:
            proofs = [commitment.proof_for(args.address, args.amount)]
    except WhitelistException as e:
        return report_error(e, as_json)

    logger.info(f"Generated {len(proofs)} proof(s) against {commitment.hex_root}")

    if as_json:
        if args.all:
            print_json({"root": commitment.hex_root, "proofs": [p.to_dict() for p in proofs]})
        else:
            print_json(proofs[0].to_dict())
    else:
        for i, entry_proof in enumerate(proofs):
            if i:
                print()
            print_proof_human(entry_proof)

    return EXIT_SUCCESS
