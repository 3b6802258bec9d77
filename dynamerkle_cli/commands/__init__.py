"""
CLI command modules.
"""

from dynamerkle_cli.commands import prove, root, verify

__all__ = ["prove", "root", "verify"]
