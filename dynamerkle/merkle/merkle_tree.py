"""
Module 03 - Dynamic Merkle Tree
Tree construction, in-place appends, proof generation and verification.

This module provides:
- MerkleTree: array-indexed hash tree supporting appends
- MerkleProof: immutable inclusion proof (sibling digest + side per level)
- build_tree / insert / prove / verify: functional entry points
- build_merkle_root: root of pre-hashed leaves without keeping a tree

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(0x00 || element_bytes)
2. Parent hashing: parent = H(0x01 || left || right)
3. Padding rule: at any level with an odd node count the last node is
   paired with itself. The duplicate is never stored; it only appears as
   the right operand of its parent and as a RIGHT sibling in proofs.
4. Empty input: rejected, there is no empty tree
5. Single leaf: root = leaf hash, depth 0, empty proof

Layout:
    levels[0] holds the leaf digests in insertion order, levels[k + 1][j]
    is the parent of levels[k][2j] and levels[k][2j + 1] (or of
    levels[k][2j] twice when 2j is the last position), levels[-1] == [root].

Appending touches only the last node of every level, so insert() re-hashes
one leaf-to-root path and produces exactly the levels a fresh build over
the extended element list would.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

from pydantic import ValidationError

from dynamerkle.config.runtime import get_default_config
from dynamerkle.crypto.hashing import (
    DEFAULT_ALGORITHM,
    SUPPORTED_ALGORITHMS,
    Element,
    Hasher,
    element_bytes,
    from_hex,
    get_hasher,
    to_hex,
)
from dynamerkle.schemas.canonical import dumps_canonical
from dynamerkle.schemas.errors import (
    EmptyInputException,
    LeafIndexOutOfRangeException,
    MerkleException,
    ProofFormatException,
)
from dynamerkle.schemas.proof import InclusionProofModel, ProofStepModel


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Position of the sibling operand when folding a proof step."""
    LEFT = "left"
    RIGHT = "right"

    def flipped(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class ProofStep:
    """One level of an inclusion proof."""
    sibling: bytes
    side: Side

    def __post_init__(self) -> None:
        if isinstance(self.sibling, (bytearray, memoryview)):
            object.__setattr__(self, "sibling", bytes(self.sibling))
        if not isinstance(self.sibling, bytes):
            raise TypeError(
                f"Proof sibling must be bytes, got {type(self.sibling).__name__}"
            )
        object.__setattr__(self, "side", Side(self.side))


@dataclass(frozen=True)
class Leaf:
    """A leaf of the tree: its position, digest and the raw element bytes."""
    index: int
    digest: bytes
    value: bytes


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion proof for a single leaf.

    Steps run from the leaf level up to (not including) the root. The
    remaining fields record the tree at generation time; verification
    always takes the trusted root from the caller.

    Attributes:
        leaf_index: 0-based position of the proven leaf
        leaf_count: Number of leaves in the tree when the proof was made
        steps: (sibling digest, side) pairs, bottom-up
        root: Root of the tree when the proof was made
        algorithm: Hash algorithm of the tree
    """
    leaf_index: int
    leaf_count: int
    steps: tuple[ProofStep, ...]
    root: bytes
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        if self.leaf_index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.leaf_index}")
        if self.leaf_count < 1:
            raise ValueError(f"Leaf count must be positive, got {self.leaf_count}")
        if self.leaf_index >= self.leaf_count:
            raise ValueError(
                f"Leaf index {self.leaf_index} not below leaf count {self.leaf_count}"
            )
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: {self.algorithm!r}")
        steps = tuple(
            step if isinstance(step, ProofStep) else ProofStep(*step)
            for step in self.steps
        )
        object.__setattr__(self, "steps", steps)

    @property
    def siblings(self) -> list[bytes]:
        return [step.sibling for step in self.steps]

    @property
    def sides(self) -> list[Side]:
        return [step.side for step in self.steps]

    def verify(self, leaf_value: Element, trusted_root: bytes) -> bool:
        """
        Verify leaf_value against trusted_root.

        The root recorded in the proof is informational and is not consulted.
        """
        return verify(leaf_value, self, trusted_root)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_model(self) -> InclusionProofModel:
        return InclusionProofModel(
            algorithm=self.algorithm,
            leaf_index=self.leaf_index,
            leaf_count=self.leaf_count,
            root=to_hex(self.root),
            steps=[
                ProofStepModel(sibling=to_hex(step.sibling), side=step.side.value)
                for step in self.steps
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump(mode="json")

    def to_json(self) -> str:
        """Canonical JSON (sorted keys, no whitespace)."""
        return dumps_canonical(self.to_model())

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        max_steps: int | None = None,
    ) -> "MerkleProof":
        """
        Decode a proof produced by to_dict().

        Args:
            data: Serialized proof
            max_steps: Upper bound on the number of steps; defaults to the
                       configured proofs.max_proof_steps

        Raises:
            ProofFormatException: If the data is malformed
        """
        if max_steps is None:
            max_steps = get_default_config().proofs.max_proof_steps

        try:
            model = InclusionProofModel.model_validate(data)
        except ValidationError as e:
            raise ProofFormatException(
                f"Invalid proof: {e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        if len(model.steps) > max_steps:
            raise ProofFormatException(
                f"Proof has {len(model.steps)} steps, limit is {max_steps}",
                details={"steps": len(model.steps), "max_steps": max_steps},
            )

        try:
            hasher = get_hasher(model.algorithm)
        except MerkleException as e:
            raise ProofFormatException(e.message, details=e.details) from e

        root = from_hex(model.root)
        steps = tuple(
            ProofStep(sibling=from_hex(step.sibling), side=Side(step.side))
            for step in model.steps
        )
        for digest in [root, *(step.sibling for step in steps)]:
            if len(digest) != hasher.digest_size:
                raise ProofFormatException(
                    f"Digest length {len(digest)} does not match "
                    f"{hasher.algorithm} digest size {hasher.digest_size}",
                )

        return cls(
            leaf_index=model.leaf_index,
            leaf_count=model.leaf_count,
            steps=steps,
            root=root,
            algorithm=hasher.algorithm,
        )

    @classmethod
    def from_json(cls, text: str | bytes, max_steps: int | None = None) -> "MerkleProof":
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ProofFormatException(f"Proof is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ProofFormatException("Proof JSON must be an object")
        return cls.from_dict(data, max_steps=max_steps)


# =============================================================================
# Level helpers
# =============================================================================

def _resolve_hasher(hasher: Hasher | None = None, algorithm: str | None = None) -> Hasher:
    if hasher is not None:
        return hasher
    if algorithm is not None:
        return get_hasher(algorithm)
    return get_hasher(get_default_config().hashing.algorithm)


def _parent(nodes: Sequence[bytes], parent_index: int, hasher: Hasher) -> bytes:
    """Hash the pair under parent_index, duplicating a trailing odd node."""
    left_index = 2 * parent_index
    left = nodes[left_index]
    right = nodes[left_index + 1] if left_index + 1 < len(nodes) else left
    return hasher.node_hash(left, right)


def _build_levels(leaf_digests: Sequence[bytes], hasher: Hasher) -> list[list[bytes]]:
    levels: list[list[bytes]] = [list(leaf_digests)]
    current = levels[0]
    while len(current) > 1:
        current = [
            _parent(current, j, hasher)
            for j in range((len(current) + 1) // 2)
        ]
        levels.append(current)
    return levels


def compute_tree_depth(leaf_count: int) -> int:
    """
    Number of levels above the leaves, i.e. the proof length.

    Equals ceil(log2(leaf_count)); 0 for a single leaf.

    Example:
        >>> [compute_tree_depth(n) for n in (1, 2, 3, 4, 5, 8, 9)]
        [0, 1, 2, 2, 3, 3, 4]
    """
    if leaf_count < 1:
        raise ValueError(f"Leaf count must be positive, got {leaf_count}")
    depth = 0
    n = leaf_count
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


def build_merkle_root(leaf_digests: Sequence[bytes], hasher: Hasher | None = None) -> bytes:
    """
    Root over already-hashed leaves, using the same padding rule as MerkleTree.

    Raises:
        EmptyInputException: If leaf_digests is empty
    """
    if len(leaf_digests) == 0:
        raise EmptyInputException()
    hasher = _resolve_hasher(hasher)
    current = list(leaf_digests)
    while len(current) > 1:
        current = [
            _parent(current, j, hasher)
            for j in range((len(current) + 1) // 2)
        ]
    return current[0]


# =============================================================================
# Tree
# =============================================================================

class MerkleTree:
    """
    Binary hash tree over an ordered, append-only list of elements.

    Not safe for concurrent mutation: callers must hold exclusive access
    while calling insert()/extend(). Proofs are immutable snapshots.

    Example:
        >>> tree = MerkleTree([b"a", b"b", b"c"])
        >>> proof = tree.prove(2)
        >>> tree.insert(b"d")
        3
        >>> verify(b"c", tree.prove(2), tree.root)
        True
        >>> verify(b"c", proof, tree.root)
        False
    """

    def __init__(self, elements: Iterable[Element], hasher: Hasher | None = None) -> None:
        values = [element_bytes(e, position=i) for i, e in enumerate(elements)]
        if not values:
            raise EmptyInputException()

        self._hasher = _resolve_hasher(hasher)
        self._values: list[bytes] = values
        self._levels = _build_levels(
            [self._hasher.leaf_hash(v) for v in values],
            self._hasher,
        )
        logger.debug(
            f"Built Merkle tree: {self.leaf_count} leaves, depth {self.depth}, "
            f"{self._hasher.algorithm} root {self.root.hex()[:16]}"
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def algorithm(self) -> str:
        return self._hasher.algorithm

    @property
    def leaf_count(self) -> int:
        return len(self._values)

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def depth(self) -> int:
        return len(self._levels) - 1

    @property
    def levels(self) -> list[list[bytes]]:
        """Copy of the node digests, leaves first."""
        return [list(level) for level in self._levels]

    @property
    def leaves(self) -> tuple[Leaf, ...]:
        return tuple(self.leaf(i) for i in range(self.leaf_count))

    def leaf(self, index: int) -> Leaf:
        """Leaf at index in insertion order."""
        self._check_index(index)
        return Leaf(index=index, digest=self._levels[0][index], value=self._values[index])

    def __len__(self) -> int:
        return self.leaf_count

    def __iter__(self) -> Iterator[Leaf]:
        for i in range(self.leaf_count):
            yield self.leaf(i)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaf_count={self.leaf_count}, depth={self.depth}, "
            f"algorithm={self.algorithm!r}, root={to_hex(self.root)!r})"
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, element: Element) -> int:
        """
        Append one element and re-hash its path to the root.

        When the previous leaf count was a power of two the walk adds a new
        level whose left child is the previous root.

        Returns:
            Index of the new leaf

        Raises:
            InvalidElementException: If element is not bytes or str (the
                tree is left unchanged)
        """
        value = element_bytes(element, position=self.leaf_count)
        self._append(value)
        logger.debug(
            f"Inserted leaf {self.leaf_count - 1}: depth {self.depth}, "
            f"root {self.root.hex()[:16]}"
        )
        return self.leaf_count - 1

    def extend(self, elements: Iterable[Element]) -> list[int]:
        """
        Append several elements in order.

        All elements are validated before the tree is touched.
        """
        start = self.leaf_count
        values = [element_bytes(e, position=start + i) for i, e in enumerate(elements)]
        for value in values:
            self._append(value)
        if values:
            logger.debug(
                f"Extended tree by {len(values)} leaves to {self.leaf_count}, "
                f"root {self.root.hex()[:16]}"
            )
        return list(range(start, self.leaf_count))

    def _append(self, value: bytes) -> None:
        self._values.append(value)
        self._levels[0].append(self._hasher.leaf_hash(value))

        index = len(self._levels[0]) - 1
        level = 0
        while len(self._levels[level]) > 1:
            parent_index = index // 2
            digest = _parent(self._levels[level], parent_index, self._hasher)
            if level + 1 == len(self._levels):
                self._levels.append([])
            above = self._levels[level + 1]
            if parent_index < len(above):
                # Fills the slot that held the implicit duplicate
                above[parent_index] = digest
            else:
                above.append(digest)
            index = parent_index
            level += 1

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def prove(self, leaf_index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at leaf_index.

        A self-paired node contributes its own digest as a RIGHT sibling,
        so the proof length always equals the tree depth.

        Raises:
            LeafIndexOutOfRangeException: If leaf_index is not in the tree
        """
        self._check_index(leaf_index)

        steps: list[ProofStep] = []
        index = leaf_index
        for nodes in self._levels[:-1]:
            if index % 2 == 1:
                steps.append(ProofStep(sibling=nodes[index - 1], side=Side.LEFT))
            else:
                sibling_index = index + 1 if index + 1 < len(nodes) else index
                steps.append(ProofStep(sibling=nodes[sibling_index], side=Side.RIGHT))
            index //= 2

        return MerkleProof(
            leaf_index=leaf_index,
            leaf_count=self.leaf_count,
            steps=tuple(steps),
            root=self.root,
            algorithm=self.algorithm,
        )

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
        if index < 0 or index >= self.leaf_count:
            raise LeafIndexOutOfRangeException(index, self.leaf_count)


# =============================================================================
# Functional entry points
# =============================================================================

def build_tree(
    elements: Iterable[Element],
    algorithm: str | None = None,
    hasher: Hasher | None = None,
) -> MerkleTree:
    """
    Build a tree from an ordered sequence of elements.

    Args:
        elements: bytes or str values, at least one
        algorithm: Hash algorithm name; defaults to the configured one
        hasher: Explicit Hasher, takes precedence over algorithm

    Raises:
        EmptyInputException: If elements is empty
        InvalidElementException: If an element is not bytes or str
    """
    return MerkleTree(elements, hasher=_resolve_hasher(hasher, algorithm))


def insert(tree: MerkleTree, element: Element) -> int:
    """Append element to tree in place; returns the new leaf index."""
    return tree.insert(element)


def prove(tree: MerkleTree, leaf_index: int) -> MerkleProof:
    """Inclusion proof for tree's leaf at leaf_index."""
    return tree.prove(leaf_index)


def compute_root_from_proof(
    leaf_digest: bytes,
    steps: Iterable[ProofStep],
    hasher: Hasher,
) -> bytes:
    """
    Fold a leaf digest with proof steps, bottom-up.

    Raises:
        ProofFormatException: If a sibling has the wrong length for hasher
    """
    current = leaf_digest
    for level, step in enumerate(steps):
        if len(step.sibling) != hasher.digest_size:
            raise ProofFormatException(
                f"Sibling at level {level} has {len(step.sibling)} bytes, "
                f"expected {hasher.digest_size}",
                details={"level": level},
            )
        if step.side is Side.LEFT:
            current = hasher.node_hash(step.sibling, current)
        else:
            current = hasher.node_hash(current, step.sibling)
    return current


def _shape_error(proof: MerkleProof) -> str | None:
    """Reason the step sides disagree with leaf_index/leaf_count, if any."""
    expected_depth = compute_tree_depth(proof.leaf_count)
    if len(proof.steps) != expected_depth:
        return f"{len(proof.steps)} steps for a tree of depth {expected_depth}"
    for level, step in enumerate(proof.steps):
        expected = Side.LEFT if (proof.leaf_index >> level) & 1 else Side.RIGHT
        if step.side is not expected:
            return f"side {step.side.value} at level {level}, expected {expected.value}"
    return None


def verify_digest(
    leaf_digest: bytes,
    proof: MerkleProof,
    trusted_root: bytes,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify an already-hashed leaf against trusted_root.

    Returns False (never raises) for proofs that do not reproduce the
    root, whose sides disagree with the recorded leaf position, or whose
    siblings have the wrong digest length.
    """
    hasher = hasher or get_hasher(proof.algorithm)

    reason = _shape_error(proof)
    if reason is not None:
        logger.debug(f"Rejected malformed proof for leaf {proof.leaf_index}: {reason}")
        return False

    try:
        computed = compute_root_from_proof(leaf_digest, proof.steps, hasher)
    except ProofFormatException as e:
        logger.debug(f"Rejected malformed proof for leaf {proof.leaf_index}: {e.message}")
        return False

    if computed != trusted_root:
        logger.debug(
            f"Root mismatch for leaf {proof.leaf_index}: computed {computed.hex()[:16]}"
        )
        return False
    return True


def verify(
    leaf_value: Element,
    proof: MerkleProof,
    trusted_root: bytes,
    hasher: Hasher | None = None,
) -> bool:
    """
    Check that leaf_value is included under trusted_root.

    current = leaf_hash(leaf_value); for each step the sibling is the left
    operand when its side is LEFT, the right operand otherwise; the result
    must equal trusted_root. A proof made before later inserts is stale and
    simply fails against the newer root.

    Args:
        leaf_value: Raw element (bytes or str)
        proof: Inclusion proof
        trusted_root: Root digest obtained from a trusted source
        hasher: Defaults to the hasher named by proof.algorithm

    Returns:
        True if the proof is valid, False otherwise
    """
    hasher = hasher or get_hasher(proof.algorithm)
    return verify_digest(hasher.leaf_hash(element_bytes(leaf_value)), proof, trusted_root, hasher)


__all__ = [
    "Side",
    "ProofStep",
    "Leaf",
    "MerkleProof",
    "MerkleTree",
    "build_tree",
    "insert",
    "prove",
    "verify",
    "verify_digest",
    "compute_root_from_proof",
    "compute_tree_depth",
    "build_merkle_root",
]
