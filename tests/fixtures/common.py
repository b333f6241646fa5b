"""
Common test fixtures shared by all modules.

Provides factory functions for chainkit data structures:
- value lists for Merkle trees
- MerkleTree
- Blockchain

Plus helpers that tamper with internal state, for validation tests.
"""

import dataclasses
from typing import Any, Optional

from chainkit.chain.blockchain import Blockchain
from chainkit.merkle.merkle_tree import MerkleTree


SAMPLE_WORDS = ["first", "second", "third", "fourth", "fifth"]

FORGED_DIGEST = "f" * 64


# =============================================================================
# Merkle Tree Factories
# =============================================================================

def make_values(count: int = 5, prefix: str = "value") -> list[str]:
    """Create ``count`` unique string values, deliberately unsorted."""
    return [f"{prefix}-{i:04d}" for i in reversed(range(count))]


def make_tree(values: Optional[list[Any]] = None) -> MerkleTree:
    """Create a MerkleTree over ``values`` (default: SAMPLE_WORDS)."""
    return MerkleTree.construct(SAMPLE_WORDS if values is None else values)


def replace_node(tree: MerkleTree, node_id: int, **changes: Any) -> None:
    """Overwrite fields of one arena node in place."""
    tree._nodes[node_id] = dataclasses.replace(tree._nodes[node_id], **changes)


def leaf_ids(tree: MerkleTree) -> list[int]:
    """Arena ids of the leaves in sorted order."""
    return list(tree._levels[0])


def internal_ids(tree: MerkleTree) -> list[int]:
    """Arena ids of every internal node, bottom-up."""
    return [node_id for level in tree._levels[1:] for node_id in level]


# =============================================================================
# Blockchain Factories
# =============================================================================

def make_chain(length: int = 5, genesis_marker: Optional[str] = None) -> Blockchain:
    """Create a chain of ``length`` blocks with dict payloads."""
    chain = Blockchain(genesis_marker=genesis_marker)
    for i in range(length):
        chain.append({"seq": i, "memo": f"block {i}", "amounts": [i, i * 10]})
    return chain
