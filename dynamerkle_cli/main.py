"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    dynamerkle root <elements> [--append X ...] [--json]
    dynamerkle prove <elements> <index> [--append X ...] [--out PATH]
    dynamerkle verify <element> <proof> --root 0x... [--json]
    dynamerkle config --init | --show

Elements are read one per line from a file, or from stdin when given as '-'.

Environment Variables:
    DYNAMERKLE_HASH_ALGORITHM   Hash algorithm for new trees (default: sha256)
    DYNAMERKLE_MAX_PROOF_STEPS  Step limit when decoding proofs (default: 256)
    DYNAMERKLE_LOG_LEVEL        Log level (default: INFO)
    DYNAMERKLE_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from dynamerkle.config.runtime import set_default_config
from dynamerkle.crypto.hashing import SUPPORTED_ALGORITHMS
from dynamerkle.schemas.errors import MerkleException
from dynamerkle_cli import __version__
from dynamerkle_cli.commands import prove, root, verify
from dynamerkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
)
from dynamerkle_cli.config import (
    DEFAULT_CONFIG_NAME,
    get_default_config_template,
    load_config,
)


logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "elements",
        type=str,
        help="File with one element per line ('-' for stdin)",
    )
    parser.add_argument(
        "--append", "-a",
        action="append",
        default=None,
        metavar="ELEMENT",
        help="Element to insert after the tree is built (repeatable, applied in order)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="dynamerkle",
        description="Build dynamic Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_NAME} "
             "or ~/.config/dynamerkle/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        choices=sorted(SUPPORTED_ALGORITHMS),
        help="Hash algorithm for new trees (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of a tree built from a file of elements",
    )
    _add_tree_arguments(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output algorithm, leaf count, depth and root as JSON",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Emit the inclusion proof for one leaf",
    )
    _add_tree_arguments(prove_parser)
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based leaf index",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof to this file instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an element against a proof and a trusted root",
    )
    verify_parser.add_argument(
        "element",
        type=str,
        help="The element claimed to be in the tree (the line as it appears in the elements file)",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Proof JSON file ('-' for stdin)",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Trusted root as 0x-prefixed hex",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (DYNAMERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: dynamerkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (FileNotFoundError, MerkleException) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.algorithm:
        config.hashing.algorithm = args.algorithm
    args.algorithm = config.hashing.algorithm
    args.runtime_config = config
    set_default_config(config)

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
