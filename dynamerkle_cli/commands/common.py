"""
Helpers shared by the CLI commands.
"""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from dynamerkle.merkle import MerkleTree, build_tree


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def read_source(source: str) -> bytes:
    """Read a file, or stdin when source is '-'."""
    if source == "-":
        return sys.stdin.buffer.read()
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_bytes()


def read_elements(source: str) -> list[bytes]:
    """One element per line; line endings are not part of the element."""
    return read_source(source).splitlines()


def tree_from_args(args: Namespace) -> MerkleTree:
    """Build the tree described by args.elements, then apply args.append in order."""
    tree = build_tree(read_elements(args.elements), algorithm=args.algorithm)
    tree.extend(args.append or [])
    return tree
