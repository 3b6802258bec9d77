"""
Module 03 - Dynamic Merkle Tree
Append-capable Merkle tree with inclusion proofs.

Commitment Rules:
1. Leaf hashing: H(0x00 || element)
2. Parent hashing: H(0x01 || left || right)
3. Padding: last node paired with itself at any odd level
4. Empty input: rejected (EmptyInputException)
5. Single leaf: root = leaf hash

Usage:
    from dynamerkle.merkle import build_tree, verify

    tree = build_tree([b"a", b"b", b"c"])
    tree.insert(b"d")

    proof = tree.prove(0)
    assert verify(b"a", proof, tree.root)
"""
from .merkle_tree import (
    Leaf,
    MerkleProof,
    MerkleTree,
    ProofStep,
    Side,
    build_merkle_root,
    build_tree,
    compute_root_from_proof,
    compute_tree_depth,
    insert,
    prove,
    verify,
    verify_digest,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Leaf",
    "MerkleProof",
    "MerkleTree",
    "ProofStep",
    "Side",
    # Core functions
    "build_tree",
    "insert",
    "prove",
    "verify",
    "verify_digest",
    "compute_root_from_proof",
    "compute_tree_depth",
    "build_merkle_root",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
