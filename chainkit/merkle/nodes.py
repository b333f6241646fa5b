"""
Module 03 - Merkle Tree Nodes

Node variants stored in a MerkleTree's arena. Internal nodes refer to their
children by arena index, so a self-paired node simply has left == right.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Leaf:
    """A leaf wrapping one input value and its digest."""
    value: Any
    digest: str
    height: int = 0


@dataclass(frozen=True)
class PrunedLeaf:
    """A leaf whose value was discarded; only the digest remains."""
    digest: str
    height: int = 0

    @classmethod
    def from_leaf(cls, leaf: Leaf) -> "PrunedLeaf":
        return cls(digest=leaf.digest, height=leaf.height)


@dataclass(frozen=True)
class Internal:
    """
    An internal node over two children.

    digest = hash_concat(left.digest, right.digest)
    """
    left: int | None
    right: int | None
    digest: str
    height: int


MerkleNode = Union[Leaf, PrunedLeaf, Internal]


__all__ = ["Leaf", "PrunedLeaf", "Internal", "MerkleNode"]
