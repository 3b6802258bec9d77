"""
Module 01 - Schemas & Canonicalization
File: proof.py

Purpose: Wire schema for inclusion proofs.

Digests travel as 0x-prefixed lowercase hex strings. The in-memory
MerkleProof dataclass converts to and from these models.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .versioning import SCHEMA_VERSION, assert_supported_schema_version

_HEX_RE = re.compile(r"^0x(?:[0-9a-fA-F]{2})+$")


def _check_hex(value: str) -> str:
    if not _HEX_RE.match(value):
        raise ValueError(f"expected 0x-prefixed even-length hex string, got {value[:18]!r}")
    return value.lower()


class ProofStepModel(BaseModel):
    """One (sibling digest, side) pair of an inclusion proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Sibling digest as 0x-prefixed hex")
    side: Literal["left", "right"] = Field(
        ...,
        description="Whether the sibling is the left or right operand",
    )

    @field_validator("sibling")
    @classmethod
    def _validate_sibling(cls, value: str) -> str:
        return _check_hex(value)


class InclusionProofModel(BaseModel):
    """
    Serialized inclusion proof.

    Steps are ordered from the leaf level up to (not including) the root.
    `root` and `leaf_count` describe the tree at generation time.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    algorithm: str = Field(..., min_length=1)
    leaf_index: int = Field(..., ge=0)
    leaf_count: int = Field(..., ge=1)
    root: str = Field(..., description="Tree root at generation time, 0x-prefixed hex")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        assert_supported_schema_version(value)
        return value

    @field_validator("root")
    @classmethod
    def _validate_root(cls, value: str) -> str:
        return _check_hex(value)

    @model_validator(mode="after")
    def _validate_index(self) -> "InclusionProofModel":
        if self.leaf_index >= self.leaf_count:
            raise ValueError(
                f"leaf_index {self.leaf_index} not below leaf_count {self.leaf_count}"
            )
        return self
