"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigException,
    EmptyInputException,
    ErrorCodes,
    InvalidElementException,
    LeafIndexOutOfRangeException,
    MerkleError,
    MerkleException,
    ProofFormatException,
    UnsupportedAlgorithmException,
)

# Proof wire schema
from .proof import (
    InclusionProofModel,
    ProofStepModel,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigException",
    "EmptyInputException",
    "ErrorCodes",
    "InvalidElementException",
    "LeafIndexOutOfRangeException",
    "MerkleError",
    "MerkleException",
    "ProofFormatException",
    "UnsupportedAlgorithmException",
    # Proof schema
    "InclusionProofModel",
    "ProofStepModel",
]
