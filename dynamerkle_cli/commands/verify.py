"""
CLI Verify Command

Check an element against a serialized proof and a trusted root.

Usage:
    dynamerkle verify ELEMENT proof.json --root 0x... [--json]

Exit code 0 when the proof verifies, 2 when it does not.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from dynamerkle.crypto.hashing import from_hex
from dynamerkle.merkle import MerkleProof, verify
from dynamerkle.schemas.errors import MerkleException

from .common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    read_source,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    element: str
    leaf_index: int
    algorithm: str
    trusted_root: str
    valid: bool


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code
    """
    try:
        trusted_root = from_hex(args.root)
    except ValueError as e:
        print(f"Error: invalid --root: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = MerkleProof.from_json(read_source(args.proof))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        if args.json:
            print(json.dumps(e.to_error_model().model_dump(mode="json"), indent=2))
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # argv text back to the raw bytes of the element line
    valid = verify(os.fsencode(args.element), proof, trusted_root)
    summary = VerifySummary(
        element=args.element,
        leaf_index=proof.leaf_index,
        algorithm=proof.algorithm,
        trusted_root=args.root.lower(),
        valid=valid,
    )

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print("valid" if valid else "invalid")

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
