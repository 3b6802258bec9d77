"""
CLI Root Command

Build a tree from a file of elements (one per line) and print its root.

Usage:
    dynamerkle root elements.txt [--append X ...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from dynamerkle.crypto.hashing import to_hex
from dynamerkle.merkle import MerkleTree
from dynamerkle.schemas.errors import MerkleException

from .common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, tree_from_args


logger = logging.getLogger(__name__)


@dataclass
class RootSummary:
    """Summary of a built tree for CLI output."""
    algorithm: str
    leaf_count: int
    depth: int
    root: str

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "RootSummary":
        return cls(
            algorithm=tree.algorithm,
            leaf_count=tree.leaf_count,
            depth=tree.depth,
            root=to_hex(tree.root),
        )


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Returns:
        Exit code
    """
    try:
        tree = tree_from_args(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        if args.json:
            print(json.dumps(e.to_error_model().model_dump(mode="json"), indent=2))
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = RootSummary.from_tree(tree)
    logger.info(f"Built tree with {summary.leaf_count} leaves")

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print(summary.root)
    return EXIT_SUCCESS
