"""
Module 03 - Merkle Inclusion Proofs

A proof carries the sibling digests on the path from one leaf up to the
root, so a holder of the root digest can check membership of a value
without the tree itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from chainkit.crypto.hashable import hash_value
from chainkit.crypto.hashing import hash_concat


class ProofSide(str, Enum):
    """Which side of the running hash a sibling digest sits on."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: Digest of the proven value
        steps: (side, sibling digest) pairs from the leaf level upwards
        root: The root digest this proof is against
    """
    leaf: str
    steps: tuple[tuple[ProofSide, str], ...]
    root: str

    def compute_root(self, start: str | None = None) -> str:
        """Fold the steps over ``start`` (default: the proof's leaf)."""
        current = self.leaf if start is None else start
        for side, sibling in self.steps:
            if side is ProofSide.LEFT:
                current = hash_concat(sibling, current)
            else:
                current = hash_concat(current, sibling)
        return current

    def verify(self, item: Any) -> bool:
        """Check that ``item`` hashes to the proven leaf and folds up to the root."""
        item_hash = hash_value(item)
        if item_hash != self.leaf:
            return False
        return self.compute_root(item_hash) == self.root

    def check_proof_form(self, root: str, height: int) -> bool:
        """Check the proof targets ``root`` and walks a tree of ``height`` levels."""
        return root == self.root and height == len(self.steps)


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """Verify a proof from its own leaf digest."""
    return proof.compute_root() == proof.root


__all__ = ["ProofSide", "MerkleProof", "verify_merkle_proof"]
