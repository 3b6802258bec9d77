"""
Module 02 - Hashing Utilities
Leaf/node hashing for Merkle trees plus general hashing helpers.

This module provides:
- Hasher: domain-separated leaf and internal-node hashing
- SHA-256 hashing for raw bytes
- Canonical hashing for objects (via dumps_canonical)
- Hex encoding/decoding with 0x prefix

Domain separation (RFC 6962 style):
- leaf_hash(data)        = H(0x00 || data)
- node_hash(left, right) = H(0x01 || left || right)

A crafted leaf payload can therefore never hash to the same digest as an
internal node built from two child digests.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Union

from dynamerkle.schemas.canonical import dumps_canonical
from dynamerkle.schemas.errors import (
    InvalidElementException,
    UnsupportedAlgorithmException,
)


LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"

DEFAULT_ALGORITHM: str = "sha256"

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset({
    "sha256",
    "sha512",
    "sha3_256",
    "sha3_512",
    "blake2b",
    "blake2s",
})

Element = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class Hasher:
    """
    Deterministic, order-sensitive digest function for tree nodes.

    The algorithm is fixed at construction; a tree keeps the hasher it
    was built with for its whole lifetime.

    Example:
        >>> h = Hasher()
        >>> len(h.leaf_hash(b"a"))
        32
        >>> h.node_hash(b"a" * 32, b"b" * 32) != h.node_hash(b"b" * 32, b"a" * 32)
        True
    """
    algorithm: str = DEFAULT_ALGORITHM
    digest_size: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise UnsupportedAlgorithmException(self.algorithm, SUPPORTED_ALGORITHMS)
        object.__setattr__(self, "digest_size", hashlib.new(self.algorithm).digest_size)

    def leaf_hash(self, data: bytes) -> bytes:
        """Hash raw leaf data: H(0x00 || data)."""
        return hashlib.new(self.algorithm, LEAF_PREFIX + data).digest()

    def node_hash(self, left: bytes, right: bytes) -> bytes:
        """Hash two child digests in order: H(0x01 || left || right)."""
        h = hashlib.new(self.algorithm, NODE_PREFIX)
        h.update(left)
        h.update(right)
        return h.digest()


_HASHERS: dict[str, Hasher] = {}


def get_hasher(algorithm: str | None = None) -> Hasher:
    """
    Return a shared Hasher for the given algorithm name.

    Raises:
        UnsupportedAlgorithmException: If the algorithm is not supported.
    """
    name = (algorithm or DEFAULT_ALGORITHM).lower().replace("-", "_")
    hasher = _HASHERS.get(name)
    if hasher is None:
        hasher = Hasher(name)
        _HASHERS[name] = hasher
    return hasher


def element_bytes(element: Any, position: int | None = None) -> bytes:
    """
    Convert a tree element to the bytes that get leaf-hashed.

    bytes-like values are used as-is; str is encoded as UTF-8.

    Raises:
        InvalidElementException: For any other type.
    """
    if isinstance(element, bytes):
        return element
    if isinstance(element, (bytearray, memoryview)):
        return bytes(element)
    if isinstance(element, str):
        return element.encode("utf-8")
    where = f" at position {position}" if position is not None else ""
    raise InvalidElementException(
        f"Element{where} must be bytes or str, got {type(element).__name__}",
        position=position,
    )


def hash_leaf(data: bytes) -> bytes:
    """Leaf hash with the default algorithm."""
    return get_hasher().leaf_hash(data)


def hash_node(left: bytes, right: bytes) -> bytes:
    """Internal-node hash with the default algorithm."""
    return get_hasher().node_hash(left, right)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def canonical_bytes(obj: Any) -> bytes:
    """UTF-8 bytes of the canonical JSON form of obj."""
    return dumps_canonical(obj).encode("utf-8")


def hash_canonical(obj: Any) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    Rule: sha256(dumps_canonical(obj).encode("utf-8"))

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    return sha256(canonical_bytes(obj))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "Element",
    "Hasher",
    "get_hasher",
    "element_bytes",
    "hash_leaf",
    "hash_node",
    "sha256",
    "canonical_bytes",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
