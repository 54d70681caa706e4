"""
Module 01 - Schemas & Errors
File: whitelist.py

Purpose: Whitelist record schemas. A WhitelistEntry is the validated,
normalized form of one (address, allocation amount) pair; a Whitelist
is the ordered list the tree is built from.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.whitelist.address import normalize_address

UINT256_MAX = 2**256 - 1


class WhitelistEntry(BaseModel):
    """
    One whitelisted (address, amount) record.

    The address is normalized on validation to lower-case "0x" hex, so
    differently-cased spellings of one address compare equal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(
        ...,
        description="20-byte hex address, any letter case",
        examples=["0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"],
    )
    amount: int = Field(
        ...,
        ge=0,
        le=UINT256_MAX,
        description="Allocation amount (uint256)",
    )

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, value: Any) -> str:
        return "0x" + normalize_address(value).hex()

    @field_validator("amount", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("amount must be an integer, not a boolean")
        return value

    @property
    def identity(self) -> bytes:
        """Canonical 20-byte identity for leaf encoding."""
        return bytes.fromhex(self.address[2:])

    def as_record(self) -> tuple[bytes, int]:
        return self.identity, self.amount

    @classmethod
    def from_raw(cls, raw: Any) -> "WhitelistEntry":
        """
        Build an entry from a raw loader value.

        Accepts an ``[address, amount]`` pair or an
        ``{"address": ..., "amount": ...}`` mapping.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            return cls.model_validate(raw)
        if isinstance(raw, (list, tuple)) and len(raw) == 2:
            return cls(address=raw[0], amount=raw[1])
        raise ValueError(
            "Whitelist entry must be an [address, amount] pair or an "
            "object with 'address' and 'amount'"
        )


class Whitelist(BaseModel):
    """Ordered whitelist. Entry order is leaf order."""

    model_config = ConfigDict(extra="forbid")

    entries: list[WhitelistEntry] = Field(
        default_factory=list,
        description="Whitelisted records in leaf order",
    )

    @field_validator("entries", mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [WhitelistEntry.from_raw(item) for item in value]
        return value

    def records(self) -> list[tuple[bytes, int]]:
        return [entry.as_record() for entry in self.entries]

    def find(self, address: str) -> list[int]:
        """Indices of every entry for this address (any letter case)."""
        target = "0x" + normalize_address(address).hex()
        return [i for i, entry in enumerate(self.entries) if entry.address == target]

    def __len__(self) -> int:
        return len(self.entries)
