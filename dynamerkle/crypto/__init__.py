"""
Core cryptographic utilities.

Provides the domain-separated Hasher used by the Merkle engine and the
hex/canonical hashing helpers used by the proof wire format.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    LEAF_PREFIX,
    NODE_PREFIX,
    SUPPORTED_ALGORITHMS,
    Element,
    Hasher,
    canonical_bytes,
    element_bytes,
    from_hex,
    get_hasher,
    hash_canonical,
    hash_leaf,
    hash_node,
    sha256,
    to_hex,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "SUPPORTED_ALGORITHMS",
    "Element",
    "Hasher",
    "canonical_bytes",
    "element_bytes",
    "from_hex",
    "get_hasher",
    "hash_canonical",
    "hash_leaf",
    "hash_node",
    "sha256",
    "to_hex",
]
