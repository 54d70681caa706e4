"""
Module 01 - Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for whitelist commitments.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

All errors here are local validation failures on malformed input.
None of them are retryable. A proof that simply does not verify is
NOT an error: verification returns False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Record & Encoding Errors
    INVALID_IDENTITY_LENGTH = "INVALID_IDENTITY_LENGTH"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    AMOUNT_OUT_OF_RANGE = "AMOUNT_OUT_OF_RANGE"

    # Tree Errors
    EMPTY_LEAF_SET = "EMPTY_LEAF_SET"
    INVALID_LEAF = "INVALID_LEAF"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof Errors
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Configuration Errors
    UNKNOWN_HASH_FUNCTION = "UNKNOWN_HASH_FUNCTION"
    UNKNOWN_CODEC = "UNKNOWN_CODEC"

    # Input Errors
    WHITELIST_LOAD_ERROR = "WHITELIST_LOAD_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class WhitelistError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI JSON output and the HTTP API to carry errors
    without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "WhitelistException":
        """Convert this error model to a raisable exception."""
        return WhitelistException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class WhitelistException(Exception):
    """
    Base exception for all whitelist commitment errors.

    This exception carries structured error information and can be
    converted to/from WhitelistError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "WHITELIST_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> WhitelistError:
        """Convert this exception to a WhitelistError model."""
        return WhitelistError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidIdentityLength(WhitelistException, ValueError):
    """Raised when an identity is not exactly the expected byte width."""

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected is not None:
            full_details["expected"] = expected
        if actual is not None:
            full_details["actual"] = actual
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_IDENTITY_LENGTH,
            details=full_details,
        )


class InvalidAddressError(WhitelistException, ValueError):
    """Raised when a textual address cannot be normalized to bytes."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=full_details,
        )


class AmountOutOfRangeError(WhitelistException, ValueError):
    """Raised when an amount does not fit the fixed-width unsigned encoding."""

    def __init__(
        self,
        message: str,
        amount: int | None = None,
        width: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if amount is not None:
            full_details["amount"] = str(amount)
        if width is not None:
            full_details["width"] = width
        super().__init__(
            message=message,
            code=ErrorCodes.AMOUNT_OUT_OF_RANGE,
            details=full_details,
        )


class EmptyLeafSetError(WhitelistException, ValueError):
    """Raised when building a tree from zero leaves."""

    def __init__(self, message: str = "Cannot build a Merkle tree from an empty leaf set") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_LEAF_SET)


class InvalidLeafError(WhitelistException, ValueError):
    """Raised when a leaf passed to the tree builder is not a digest."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF,
            details=full_details,
        )


class IndexOutOfRangeError(WhitelistException, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(self, index: int, leaf_count: int) -> None:
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": index, "leaf_count": leaf_count},
        )


class LeafNotFoundError(WhitelistException, LookupError):
    """Raised when a proof is requested for a leaf that is not in the tree."""

    def __init__(self, leaf_hex: str) -> None:
        super().__init__(
            message=f"Leaf {leaf_hex} is not part of this tree",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details={"leaf": leaf_hex},
        )


class MalformedProofError(WhitelistException, ValueError):
    """Raised when verifier input is structurally invalid (not when it fails)."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
        )


class UnknownHashFunctionError(WhitelistException, ValueError):
    """Raised when a hash function name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            message=f"Unknown hash function {name!r}, expected one of {available}",
            code=ErrorCodes.UNKNOWN_HASH_FUNCTION,
            details={"name": name, "available": available},
        )


class UnknownCodecError(WhitelistException, ValueError):
    """Raised when a leaf codec name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            message=f"Unknown codec {name!r}, expected one of {available}",
            code=ErrorCodes.UNKNOWN_CODEC,
            details={"name": name, "available": available},
        )


class WhitelistLoadError(WhitelistException):
    """Raised when a whitelist file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.WHITELIST_LOAD_ERROR,
            details=full_details,
        )
