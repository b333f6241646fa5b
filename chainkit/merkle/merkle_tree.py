"""
Module 03 - Merkle Tree Implementation
Construction, containment search, pruning and validation of a Merkle tree
over a sorted collection of hashable values.

Commitment Rules (Hard Contracts):
1. Values are sorted by their natural order before hashing.
2. Leaf hashing: leaf = hash_value(value)
3. Parent hashing: parent = sha256(left.digest ++ right.digest)
4. Padding rule: when a level has an odd number of nodes, the last node is
   paired with itself. This also applies to a single leaf, so the root is
   always an internal node.
5. Pruning discards a leaf's value and keeps its digest; digests and shape
   never change.

Nodes live in an arena (``self._nodes``) and internal nodes refer to their
children by index. ``self._levels`` records the node ids of every level,
leaves first, which is what proofs walk.
"""
from __future__ import annotations

import copy
import logging
from bisect import bisect_left
from typing import Any, Iterable

from chainkit.crypto.hashable import hash_value
from chainkit.crypto.hashing import hash_concat
from chainkit.merkle.merkle_proofs import MerkleProof, ProofSide
from chainkit.merkle.nodes import Internal, Leaf, MerkleNode, PrunedLeaf
from chainkit.schemas.errors import (
    EmptyInputException,
    PrunedTreeSearchException,
    StructuralException,
)
from chainkit.schemas.verification import ValidationResult


logger = logging.getLogger(__name__)

_NODE_TYPES = (Leaf, PrunedLeaf, Internal)


def merkle_parent(left: str, right: str) -> str:
    """
    Compute the parent digest of two child digests.

    Parent digest is deterministic: sha256(left ++ right)
    """
    return hash_concat(left, right)


def _sorted_contains(ordered: list[Any], value: Any) -> bool:
    k = bisect_left(ordered, value)
    return k < len(ordered) and ordered[k] == value


class MerkleTree:
    """
    A Merkle tree over the sorted digests of a collection of values.

    For values [z, x, y] the tree is built over the sorted order [x, y, z]:

                  h(h(x)h(y) ++ h(z)h(z))
                   /                  \\
            h(h(x)++h(y))        h(h(z)++h(z))
              /      \\              /    \\
           h(x)      h(y)        h(z)  (h(z))

    Usage:
        tree = MerkleTree.construct(["first", "second", "third"])
        tree.contains("second")       # True
        tree.prune(["second"])
        tree.validate_pruned().ok     # True
    """

    def __init__(self, values: Iterable[Any]) -> None:
        ordered = sorted(copy.deepcopy(list(values)))
        if not ordered:
            raise EmptyInputException()

        self._nodes: list[MerkleNode] = []
        leaf_level = [
            self._add(Leaf(value=value, digest=hash_value(value)))
            for value in ordered
        ]
        self._levels: list[list[int]] = [leaf_level]

        level = leaf_level
        height = 1
        while True:
            level = self._pair_level(level, height)
            self._levels.append(level)
            if len(level) == 1:
                break
            height += 1

        self._root: int = level[0]
        # Leaf positions that still hold their value, ascending
        self._retained: list[int] = list(range(len(leaf_level)))

        logger.debug(
            f"Constructed Merkle tree: {len(leaf_level)} leaves, "
            f"height {height}, root {self.root_hash[:12]}"
        )

    @classmethod
    def construct(cls, values: Iterable[Any]) -> "MerkleTree":
        """
        Build a tree from ``values``.

        Values are deep-copied so the tree owns them, then sorted.

        Raises:
            EmptyInputException: If ``values`` is empty.
            TypeError: If the values have no common ordering.
            CanonicalizationException: If a value cannot be hashed.
        """
        return cls(values)

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    def _add(self, node: MerkleNode) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _pair_level(self, level: list[int], height: int) -> list[int]:
        next_level: list[int] = []
        for i in range(0, len(level), 2):
            left = level[i]
            right = level[i + 1] if i + 1 < len(level) else left
            digest = merkle_parent(self._nodes[left].digest, self._nodes[right].digest)
            next_level.append(
                self._add(Internal(left=left, right=right, digest=digest, height=height))
            )
        return next_level

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def root_hash(self) -> str:
        return self._nodes[self._root].digest

    @property
    def height(self) -> int:
        """Number of levels above the leaves."""
        return self._nodes[self._root].height

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def pruned_count(self) -> int:
        return self.leaf_count - len(self._retained)

    @property
    def is_pruned(self) -> bool:
        return self.pruned_count > 0

    def leaf_digests(self) -> list[str]:
        """Leaf digests in sorted value order, pruned leaves included."""
        return [self._nodes[node_id].digest for node_id in self._levels[0]]

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self.leaf_count}, pruned={self.pruned_count}, "
            f"root={self.root_hash[:12]}...)"
        )

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _leaf_value(self, position: int) -> Any:
        node_id = self._levels[0][position]
        node = self._nodes[node_id]
        if not isinstance(node, Leaf):
            raise StructuralException(
                f"Expected a leaf holding a value at position {position}, "
                f"found {type(node).__name__}",
                node_id=node_id,
            )
        return node.value

    def _locate(self, value: Any) -> int | None:
        """Return the leaf position holding ``value``, or None."""
        k = bisect_left(self._retained, value, key=self._leaf_value)
        if k < len(self._retained) and self._leaf_value(self._retained[k]) == value:
            return self._retained[k]

        # The value would sit between two retained neighbours; any pruned
        # leaves in that gap may have held it.
        lower = self._retained[k - 1] if k > 0 else -1
        upper = self._retained[k] if k < len(self._retained) else self.leaf_count
        if upper - lower > 1:
            positions = list(range(lower + 1, upper))
            raise PrunedTreeSearchException(
                f"Search reached {len(positions)} pruned leaf position(s); "
                f"cannot tell whether the value was pruned",
                positions=positions,
            )
        return None

    def contains(self, value: Any) -> bool:
        """
        Report whether ``value`` is one of the tree's leaves, in O(log n).

        The binary search runs over leaves that still hold their value. If the
        value is not among them and the gap where it would sit contains pruned
        leaves, the answer is unknowable and an error is raised instead of a
        silent False. Searches that resolve against retained leaves succeed
        even when other parts of the tree are pruned.

        Raises:
            PrunedTreeSearchException: The value may have been pruned.
        """
        return self._locate(value) is not None

    # -------------------------------------------------------------------------
    # Pruning
    # -------------------------------------------------------------------------

    def prune(self, retain: Iterable[Any]) -> int:
        """
        Discard the value of every leaf not present in ``retain``.

        Membership is decided by equality, the same rule contains() uses, so
        every retained value is still found afterwards. Pruned leaves keep
        their digest and height, so the root and every internal digest are
        unchanged. Pruning is irreversible and idempotent.

        Returns:
            Number of leaves pruned by this call.

        Raises:
            TypeError: If ``retain`` holds values with no ordering against
                each other or the tree's values.
        """
        keep = sorted(retain)

        pruned = 0
        for node_id in self._levels[0]:
            node = self._nodes[node_id]
            if isinstance(node, Leaf) and not _sorted_contains(keep, node.value):
                self._nodes[node_id] = PrunedLeaf.from_leaf(node)
                pruned += 1

        if pruned:
            self._retained = [
                position for position in self._retained
                if isinstance(self._nodes[self._levels[0][position]], Leaf)
            ]
            logger.info(
                f"Pruned {pruned} leaves; {len(self._retained)} of "
                f"{self.leaf_count} retain their values"
            )
        return pruned

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def prove(self, value: Any) -> MerkleProof:
        """
        Build an inclusion proof for ``value``.

        Raises:
            ValueError: If the value is not a leaf of this tree.
            PrunedTreeSearchException: The value may have been pruned.
        """
        position = self._locate(value)
        if position is None:
            raise ValueError(f"Value is not present in the tree: {value!r}")

        steps: list[tuple[ProofSide, str]] = []
        index = position
        for level in self._levels[:-1]:
            sibling_index = index ^ 1
            if sibling_index >= len(level):
                # Padded: the node was paired with itself
                sibling_index = index
            side = ProofSide.RIGHT if index % 2 == 0 else ProofSide.LEFT
            steps.append((side, self._nodes[level[sibling_index]].digest))
            index //= 2

        return MerkleProof(
            leaf=self._nodes[self._levels[0][position]].digest,
            steps=tuple(steps),
            root=self.root_hash,
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> ValidationResult:
        """
        Recompute every digest bottom-up and check the tree's shape.

        Returns INVALID_TREE for structural anomalies (including any pruned
        leaf, whose value can no longer be rehashed) and INVALID_HASH for any
        digest mismatch. Use validate_pruned() on pruned trees.
        """
        return self._validate(allow_pruned=False)

    def validate_pruned(self) -> ValidationResult:
        """Like validate(), but trusts the stored digest of pruned leaves."""
        return self._validate(allow_pruned=True)

    def _validate(self, allow_pruned: bool) -> ValidationResult:
        result = self._check_structure(allow_pruned)
        if result is None:
            result = self._check_hashes(self._root)
        if result is None:
            return ValidationResult.valid()
        logger.warning(
            f"Merkle tree validation failed: {result.status.value} "
            f"at node {result.position}: {result.message}"
        )
        return result

    def _node(self, node_id: Any) -> MerkleNode | None:
        if not isinstance(node_id, int) or not 0 <= node_id < len(self._nodes):
            return None
        return self._nodes[node_id]

    def _check_structure(self, allow_pruned: bool) -> ValidationResult | None:
        root = self._node(self._root)
        if not isinstance(root, _NODE_TYPES):
            return ValidationResult.invalid_tree("Tree has no valid root node")

        reached: list[int] = []
        failure = self._walk(self._root, root.height, allow_pruned, reached)
        if failure is not None:
            return failure

        if reached != self._levels[0]:
            return ValidationResult.invalid_tree(
                "Leaves reachable from the root differ from the sorted leaf sequence"
            )

        previous: Leaf | None = None
        for node_id in reached:
            node = self._nodes[node_id]
            if not isinstance(node, Leaf):
                continue
            if previous is not None and node.value < previous.value:
                return ValidationResult.invalid_tree(
                    "Leaf values are out of sorted order", position=node_id
                )
            previous = node
        return None

    def _walk(
        self,
        node_id: Any,
        expected_height: int,
        allow_pruned: bool,
        reached: list[int],
    ) -> ValidationResult | None:
        node = self._node(node_id)
        if node is None:
            return ValidationResult.invalid_tree(
                f"Missing child node {node_id!r}"
            )
        if not isinstance(node, _NODE_TYPES):
            return ValidationResult.invalid_tree(
                f"Unknown node kind {type(node).__name__}", position=node_id
            )
        if node.height != expected_height:
            return ValidationResult.invalid_tree(
                f"Node height {node.height} differs from expected {expected_height}",
                position=node_id,
            )

        if isinstance(node, Leaf):
            if expected_height != 0:
                return ValidationResult.invalid_tree(
                    "Leaf found above the leaf level", position=node_id
                )
            reached.append(node_id)
            return None

        if isinstance(node, PrunedLeaf):
            if not allow_pruned:
                return ValidationResult.invalid_tree(
                    "Pruned leaf encountered; use validate_pruned()", position=node_id
                )
            if expected_height != 0:
                return ValidationResult.invalid_tree(
                    "Pruned leaf found above the leaf level", position=node_id
                )
            reached.append(node_id)
            return None

        if expected_height == 0:
            return ValidationResult.invalid_tree(
                "Internal node found at the leaf level", position=node_id
            )
        if node.left is None or node.right is None:
            return ValidationResult.invalid_tree(
                "Internal node must have exactly two children", position=node_id
            )
        failure = self._walk(node.left, expected_height - 1, allow_pruned, reached)
        if failure is None and node.right != node.left:
            failure = self._walk(node.right, expected_height - 1, allow_pruned, reached)
        return failure

    def _check_hashes(self, node_id: int) -> ValidationResult | None:
        # Only called once the structure is known to be sound
        node = self._nodes[node_id]

        if isinstance(node, Leaf):
            if hash_value(node.value) != node.digest:
                return ValidationResult.invalid_hash(
                    "Leaf digest does not match its value", position=node_id
                )
            return None

        if isinstance(node, PrunedLeaf):
            return None

        failure = self._check_hashes(node.left)
        if failure is None and node.right != node.left:
            failure = self._check_hashes(node.right)
        if failure is not None:
            return failure

        expected = merkle_parent(self._nodes[node.left].digest, self._nodes[node.right].digest)
        if expected != node.digest:
            return ValidationResult.invalid_hash(
                "Internal node digest differs from the hash of its children",
                position=node_id,
            )
        return None


__all__ = ["MerkleTree", "merkle_parent"]
