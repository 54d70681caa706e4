"""
CLI command modules.
"""

from whitelist_cli.commands import root, proof, verify

__all__ = ["root", "proof", "verify"]
