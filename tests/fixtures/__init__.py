"""
Test fixtures package for chainkit tests.

This package provides factory functions for creating test objects:
- common.py: tree and chain factories plus tampering helpers

Usage:
    from fixtures import make_tree, replace_node

    def test_something():
        tree = make_tree(["a", "b", "c"])
        replace_node(tree, 0, digest="f" * 64)
"""

from .common import (
    FORGED_DIGEST,
    SAMPLE_WORDS,
    internal_ids,
    leaf_ids,
    make_chain,
    make_tree,
    make_values,
    replace_node,
)

__all__ = [
    "FORGED_DIGEST",
    "SAMPLE_WORDS",
    "internal_ids",
    "leaf_ids",
    "make_chain",
    "make_tree",
    "make_values",
    "replace_node",
]
