"""
CLI Prove Command

Build a tree from a file of elements and emit the inclusion proof for one
leaf as canonical JSON.

Usage:
    dynamerkle prove elements.txt INDEX [--append X ...] [--out proof.json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from dynamerkle.schemas.errors import MerkleException

from .common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, tree_from_args


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code
    """
    try:
        tree = tree_from_args(args)
        proof = tree.prove(args.index)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof_json = proof.to_json()
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(proof_json + "\n")
        logger.info(f"Wrote proof for leaf {args.index} to {out_path}")
    else:
        print(proof_json)
    return EXIT_SUCCESS
