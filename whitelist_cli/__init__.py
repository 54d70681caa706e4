"""
Module 04 - Whitelist CLI

Command-line interface for whitelist Merkle commitments.

Usage:
    python -m whitelist_cli root whitelist.json
    python -m whitelist_cli proof whitelist.json --address 0x5B38...
    python -m whitelist_cli verify --address 0x5B38... --amount 1 --root 0x... --proof 0x... 0x...
    python -m whitelist_cli config --show
"""

__version__ = "0.1.0"
