"""
dynamerkle CLI

Command-line interface for building Merkle trees and checking proofs.

Usage:
    python -m dynamerkle_cli root elements.txt
    python -m dynamerkle_cli prove elements.txt 2 --out proof.json
    python -m dynamerkle_cli verify "c" proof.json --root 0x...
"""

__version__ = "0.1.0"
