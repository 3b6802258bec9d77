"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the Merkle engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Tree construction & mutation
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_ELEMENT = "INVALID_ELEMENT"

    # Proof generation
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Proof transport
    PROOF_FORMAT_ERROR = "PROOF_FORMAT_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Hashing
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used where an error has to be reported as data (CLI JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raisable exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all dynamerkle errors.

    Carries structured error information and can be converted
    to a MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException, ValueError):
    """Raised when a tree is requested from zero elements."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from zero elements",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


class LeafIndexOutOfRangeException(MerkleException, IndexError):
    """Raised when a proof is requested for a leaf that does not exist."""

    def __init__(
        self,
        leaf_index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_index"] = leaf_index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {leaf_index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
        )
        self.leaf_index = leaf_index
        self.leaf_count = leaf_count


class InvalidElementException(MerkleException, TypeError):
    """Raised when an element is neither bytes nor str."""

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
            code=ErrorCodes.INVALID_ELEMENT,
            details=full_details,
        )


class UnsupportedAlgorithmException(MerkleException, ValueError):
    """Raised when a hash algorithm name is not supported."""

    def __init__(
        self,
        algorithm: str,
        supported: frozenset[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if supported:
            details["supported"] = sorted(supported)
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=details,
        )


class ProofFormatException(MerkleException, ValueError):
    """Raised when a serialized proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            details=details,
        )


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class ConfigException(MerkleException):
    """Exception raised for invalid configuration values."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
        )


__all__ = [
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "EmptyInputException",
    "LeafIndexOutOfRangeException",
    "InvalidElementException",
    "UnsupportedAlgorithmException",
    "ProofFormatException",
    "CanonicalizationException",
    "ConfigException",
]
