"""
Module 02 - Leaf Encoding
Canonical fixed-width encoding of (identity, amount) records into leaves.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Leaf Rules (Hard Contracts):
1. identity is exactly ``identity_width`` bytes (20, a binary address).
   Callers normalize textual addresses first (see core.whitelist.address).
2. amount is an unsigned integer encoded big-endian in ``amount_width``
   bytes (32, a uint256). Fixed width keeps the concatenation injective.
3. leaf = hash(codec(identity, amount)), no salt, no domain separation.

Codecs:
- "packed": identity || uint256(amount)
  Same bytes as Solidity abi.encodePacked(address, uint256), so with
  keccak256 the leaf equals solidityKeccak256(["address","uint256"], ...).
- "padded": leftpad32(identity) || uint256(amount)
  Same bytes as Solidity abi.encode(address, uint256).
"""
from __future__ import annotations

from dataclasses import dataclass, field

from core.crypto.hashing import DEFAULT_HASH_FUNCTION, HashFunction
from core.schemas.errors import (
    AmountOutOfRangeError,
    InvalidIdentityLength,
    UnknownCodecError,
)


IDENTITY_WIDTH: int = 20
AMOUNT_WIDTH: int = 32
WORD_SIZE: int = 32


@dataclass(frozen=True)
class Codec:
    """
    Fixed-width binary encoding of an (identity, amount) record.

    Attributes:
        name: Registry name
        identity_width: Exact identity width in bytes
        amount_width: Width of the big-endian amount in bytes
        pad_identity_to: If set, identity is left-padded with zeros to
            this many bytes before concatenation
    """
    name: str
    identity_width: int = IDENTITY_WIDTH
    amount_width: int = AMOUNT_WIDTH
    pad_identity_to: int | None = None

    def encode_identity(self, identity: bytes) -> bytes:
        if not isinstance(identity, (bytes, bytearray)):
            raise InvalidIdentityLength(
                f"Identity must be bytes, got {type(identity).__name__}",
                expected=self.identity_width,
            )
        if len(identity) != self.identity_width:
            raise InvalidIdentityLength(
                f"Identity must be exactly {self.identity_width} bytes, "
                f"got {len(identity)}",
                expected=self.identity_width,
                actual=len(identity),
            )
        identity = bytes(identity)
        if self.pad_identity_to is not None:
            return identity.rjust(self.pad_identity_to, b"\x00")
        return identity

    def encode_amount(self, amount: int) -> bytes:
        # bool is an int subclass but never a meaningful allocation
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise AmountOutOfRangeError(
                f"Amount must be an integer, got {type(amount).__name__}",
                width=self.amount_width,
            )
        if amount < 0 or amount.bit_length() > self.amount_width * 8:
            raise AmountOutOfRangeError(
                f"Amount {amount} does not fit an unsigned "
                f"{self.amount_width * 8}-bit integer",
                amount=amount,
                width=self.amount_width,
            )
        return amount.to_bytes(self.amount_width, "big")

    def encode(self, identity: bytes, amount: int) -> bytes:
        """Concatenate the fixed-width identity and amount encodings."""
        return self.encode_identity(identity) + self.encode_amount(amount)

    @property
    def encoded_size(self) -> int:
        identity_size = self.pad_identity_to or self.identity_width
        return identity_size + self.amount_width


PACKED_CODEC = Codec(name="packed")
PADDED_CODEC = Codec(name="padded", pad_identity_to=WORD_SIZE)

DEFAULT_CODEC = PACKED_CODEC

_CODECS: dict[str, Codec] = {
    PACKED_CODEC.name: PACKED_CODEC,
    PADDED_CODEC.name: PADDED_CODEC,
}


def get_codec(name: str) -> Codec:
    """
    Look up a registered codec by name (case-insensitive).

    Raises:
        UnknownCodecError: If no codec has that name
    """
    codec = _CODECS.get(name.lower())
    if codec is None:
        raise UnknownCodecError(name, available=sorted(_CODECS))
    return codec


def available_codecs() -> list[str]:
    return sorted(_CODECS)


@dataclass(frozen=True)
class LeafEncoder:
    """
    Turns whitelist records into Merkle leaves.

    Pure and stateless: the same (identity, amount) always gives the
    same leaf for a given codec and hash function.

    Example:
        >>> encoder = LeafEncoder()
        >>> leaf = encoder.encode(bytes(20), 1)
        >>> len(leaf)
        32
    """
    codec: Codec = field(default=DEFAULT_CODEC)
    hash_fn: HashFunction = field(default=DEFAULT_HASH_FUNCTION)

    def encode(self, identity: bytes, amount: int) -> bytes:
        """
        Encode and hash one record into a leaf.

        Raises:
            InvalidIdentityLength: If identity is not exactly the codec width
            AmountOutOfRangeError: If amount is negative or too wide
        """
        return self.hash_fn(self.codec.encode(identity, amount))

    def encode_many(self, records) -> list[bytes]:
        """Encode an iterable of (identity, amount) pairs, preserving order."""
        return [self.encode(identity, amount) for identity, amount in records]


def encode_leaf(
    identity: bytes,
    amount: int,
    codec: Codec = DEFAULT_CODEC,
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
) -> bytes:
    """Functional form of LeafEncoder.encode()."""
    return LeafEncoder(codec=codec, hash_fn=hash_fn).encode(identity, amount)


__all__ = [
    "IDENTITY_WIDTH",
    "AMOUNT_WIDTH",
    "Codec",
    "PACKED_CODEC",
    "PADDED_CODEC",
    "DEFAULT_CODEC",
    "get_codec",
    "available_codecs",
    "LeafEncoder",
    "encode_leaf",
]
