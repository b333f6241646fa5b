"""
Module 03 - Merkle Tree and Inclusion Proofs

This module provides:
- MerkleTree: construction, O(log n) containment, pruning and validation
- MerkleProof: inclusion proof for a single leaf
- merkle_parent / verify_merkle_proof: digest-level helpers

Usage:
    from chainkit.merkle import MerkleTree

    tree = MerkleTree.construct(["first", "second", "third"])
    assert tree.validate().ok
    proof = tree.prove("second")
    assert proof.verify("second")
"""
from .merkle_proofs import MerkleProof, ProofSide, verify_merkle_proof
from .merkle_tree import MerkleTree, merkle_parent
from .nodes import Internal, Leaf, MerkleNode, PrunedLeaf


__all__ = [
    # Tree
    "MerkleTree",
    "merkle_parent",
    # Nodes
    "Leaf",
    "PrunedLeaf",
    "Internal",
    "MerkleNode",
    # Proofs
    "MerkleProof",
    "ProofSide",
    "verify_merkle_proof",
]
