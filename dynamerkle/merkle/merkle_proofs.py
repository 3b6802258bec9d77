"""
Module 03 - Merkle Proofs Convenience Wrappers
Thin class-based wrappers around the functions in merkle_tree.py.

This module provides:
- MerkleProver: build trees and generate proofs from raw elements or objects
- MerkleVerifier: verify proofs, including serialized ones

Objects are committed by using their canonical JSON bytes as the leaf
element, so the usual leaf domain separation still applies.
"""
from __future__ import annotations

from typing import Any, Sequence

from dynamerkle.crypto.hashing import Element, Hasher, canonical_bytes
from dynamerkle.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_root,
    build_tree,
    verify,
    verify_digest,
)


class MerkleProver:
    """
    Convenience class for building trees and generating proofs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> MerkleVerifier.verify(b"b", proof, proof.root)
        True
    """

    @staticmethod
    def build(elements: Sequence[Element], algorithm: str | None = None) -> MerkleTree:
        """Build a tree from raw elements."""
        return build_tree(elements, algorithm=algorithm)

    @staticmethod
    def prove(
        elements: Sequence[Element],
        index: int,
        algorithm: str | None = None,
    ) -> MerkleProof:
        """
        Generate a proof for the element at index.

        Raises:
            LeafIndexOutOfRangeException: If index is out of range
            EmptyInputException: If elements is empty
        """
        return build_tree(elements, algorithm=algorithm).prove(index)

    @staticmethod
    def prove_object(
        objects: Sequence[Any],
        index: int,
        algorithm: str | None = None,
    ) -> MerkleProof:
        """
        Generate a proof for an object at the given index.

        Each object's leaf element is its canonical JSON encoding.
        """
        return MerkleProver.prove(
            [canonical_bytes(obj) for obj in objects],
            index,
            algorithm=algorithm,
        )

    @staticmethod
    def compute_root(leaf_digests: Sequence[bytes], hasher: Hasher | None = None) -> bytes:
        """Root over already-hashed leaves."""
        return build_merkle_root(leaf_digests, hasher)

    @staticmethod
    def compute_root_from_objects(objects: Sequence[Any], algorithm: str | None = None) -> bytes:
        """Root of the tree whose elements are the objects' canonical JSON."""
        return build_tree(
            [canonical_bytes(obj) for obj in objects],
            algorithm=algorithm,
        ).root


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify(leaf_value: Element, proof: MerkleProof, trusted_root: bytes) -> bool:
        return verify(leaf_value, proof, trusted_root)

    @staticmethod
    def verify_digest(leaf_digest: bytes, proof: MerkleProof, trusted_root: bytes) -> bool:
        return verify_digest(leaf_digest, proof, trusted_root)

    @staticmethod
    def verify_object(obj: Any, proof: MerkleProof, trusted_root: bytes) -> bool:
        """Verify an object committed through prove_object()."""
        return verify(canonical_bytes(obj), proof, trusted_root)

    @staticmethod
    def verify_serialized(
        leaf_value: Element,
        proof_json: str | bytes,
        trusted_root: bytes,
    ) -> bool:
        """
        Decode a JSON proof and verify it.

        Raises:
            ProofFormatException: If proof_json is malformed
        """
        return verify(leaf_value, MerkleProof.from_json(proof_json), trusted_root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
