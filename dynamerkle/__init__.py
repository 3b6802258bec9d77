"""
dynamerkle - dynamic Merkle trees with inclusion proofs.

Usage:
    from dynamerkle import build_tree, verify

    tree = build_tree(["a", "b", "c"])
    tree.insert("d")
    assert verify("a", tree.prove(0), tree.root)
"""

__version__ = "0.1.0"

from dynamerkle.crypto.hashing import Hasher, get_hasher
from dynamerkle.merkle import (
    Leaf,
    MerkleProof,
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    ProofStep,
    Side,
    build_tree,
    insert,
    prove,
    verify,
    verify_digest,
)
from dynamerkle.schemas.errors import (
    EmptyInputException,
    InvalidElementException,
    LeafIndexOutOfRangeException,
    MerkleException,
    ProofFormatException,
    UnsupportedAlgorithmException,
)

__all__ = [
    "Hasher",
    "get_hasher",
    "Leaf",
    "MerkleProof",
    "MerkleProver",
    "MerkleTree",
    "MerkleVerifier",
    "ProofStep",
    "Side",
    "build_tree",
    "insert",
    "prove",
    "verify",
    "verify_digest",
    "EmptyInputException",
    "InvalidElementException",
    "LeafIndexOutOfRangeException",
    "MerkleException",
    "ProofFormatException",
    "UnsupportedAlgorithmException",
]
