"""
Module 03 - Address Normalization

Turns textual addresses into the canonical 20-byte identity the leaf
encoder expects. Mixed-case, lower-case and upper-case spellings of the
same address all normalize to identical bytes. EIP-55 checksums are NOT
enforced: the letter case of the input is ignored entirely.
"""
from __future__ import annotations

from eth_utils import is_hex_address, to_canonical_address, to_checksum_address

from core.merkle.leaf_encoder import IDENTITY_WIDTH
from core.schemas.errors import InvalidAddressError


def normalize_address(address: str | bytes) -> bytes:
    """
    Normalize an address to its canonical 20-byte binary form.

    Accepts "0x"-prefixed or bare 40-character hex strings in any letter
    case, or raw 20-byte values (returned unchanged).

    Raises:
        InvalidAddressError: If the value is not a 20-byte hex address
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != IDENTITY_WIDTH:
            raise InvalidAddressError(
                f"Binary address must be {IDENTITY_WIDTH} bytes, got {len(address)}",
            )
        return bytes(address)

    if not isinstance(address, str):
        raise InvalidAddressError(
            f"Address must be a string, got {type(address).__name__}",
        )

    text = address.strip()
    if not text.startswith(("0x", "0X")):
        text = "0x" + text
    # eth_utils rejects an upper-case 0X prefix
    text = "0x" + text[2:]

    if not is_hex_address(text):
        raise InvalidAddressError(f"Invalid address: {address!r}", address=address)
    return to_canonical_address(text.lower())


def display_address(identity: bytes) -> str:
    """Render a 20-byte identity in EIP-55 mixed case for display only."""
    return to_checksum_address(identity)


__all__ = [
    "normalize_address",
    "display_address",
]
