"""
Test fixtures package for dynamerkle tests.

Usage:
    from fixtures import make_elements, flip_byte

    def test_something():
        tree = build_tree(make_elements(5))
"""

from .trees import (
    flip_byte,
    make_elements,
    rebuild_with,
)

__all__ = [
    "flip_byte",
    "make_elements",
    "rebuild_with",
]
