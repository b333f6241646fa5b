"""
Module 03 - Merkle Proof Unit Tests
Tests for chainkit/merkle/merkle_proofs.py and MerkleTree.prove
"""
import dataclasses

import pytest

from chainkit.crypto.hashing import hash_text
from chainkit.merkle import (
    MerkleProof,
    MerkleTree,
    ProofSide,
    merkle_parent,
    verify_merkle_proof,
)
from chainkit.schemas.errors import PrunedTreeSearchException

from fixtures import FORGED_DIGEST, SAMPLE_WORDS, make_tree, make_values


class TestProofGeneration:
    """Tests for MerkleTree.prove()."""

    def test_proof_verifies_for_every_value(self):
        """A proof for each leaf verifies against the tree root."""
        for count in (1, 2, 5, 7, 8):
            values = make_values(count)
            tree = MerkleTree.construct(values)
            for value in values:
                proof = tree.prove(value)
                assert proof.verify(value), f"{value} failed for size {count}"
                assert verify_merkle_proof(proof)

    def test_proof_form_matches_tree(self):
        """Proofs target the tree root and take one step per level."""
        tree = make_tree()

        for word in SAMPLE_WORDS:
            proof = tree.prove(word)
            assert proof.root == tree.root_hash
            assert proof.check_proof_form(tree.root_hash, tree.height)

    def test_proof_steps_for_first_leaf(self):
        """The smallest of five leaves has siblings on its right at every level."""
        a, b, c, d, e = [hash_text(v) for v in sorted(SAMPLE_WORDS)]
        cd = merkle_parent(c, d)
        ee = merkle_parent(e, e)
        eeee = merkle_parent(ee, ee)

        proof = make_tree().prove("fifth")

        assert proof.leaf == a
        assert proof.steps == (
            (ProofSide.RIGHT, b),
            (ProofSide.RIGHT, cd),
            (ProofSide.RIGHT, eeee),
        )

    def test_padded_leaf_uses_itself_as_sibling(self):
        """The self-paired last leaf carries its own digest as sibling."""
        e = hash_text(sorted(SAMPLE_WORDS)[-1])

        proof = make_tree().prove("third")

        assert proof.steps[0] == (ProofSide.RIGHT, e)
        assert proof.steps[-1][0] == ProofSide.LEFT

    def test_single_value_proof(self):
        tree = MerkleTree.construct(["only"])
        h = hash_text("only")

        proof = tree.prove("only")

        assert proof.steps == ((ProofSide.RIGHT, h),)
        assert proof.verify("only")

    def test_missing_value_raises(self):
        with pytest.raises(ValueError, match="not present"):
            make_tree().prove("tenth")

    def test_pruned_value_raises(self):
        tree = make_tree()
        tree.prune(["first"])

        with pytest.raises(PrunedTreeSearchException):
            tree.prove("second")

    def test_retained_value_provable_after_pruning(self):
        """Pruning keeps proofs for retained values working."""
        tree = make_tree()
        before = tree.prove("first")
        tree.prune(["first"])

        after = tree.prove("first")

        assert after == before
        assert after.verify("first")


class TestProofVerification:
    """Tests for tamper detection on proofs."""

    def test_wrong_item_fails(self):
        proof = make_tree().prove("first")

        assert not proof.verify("second")

    def test_tampered_step_fails(self):
        proof = make_tree().prove("second")
        steps = list(proof.steps)
        steps[1] = (steps[1][0], FORGED_DIGEST)
        tampered = dataclasses.replace(proof, steps=tuple(steps))

        assert not tampered.verify("second")
        assert not verify_merkle_proof(tampered)

    def test_flipped_side_fails(self):
        proof = make_tree().prove("second")
        side, digest = proof.steps[0]
        flipped = ProofSide.LEFT if side is ProofSide.RIGHT else ProofSide.RIGHT
        tampered = dataclasses.replace(proof, steps=((flipped, digest),) + proof.steps[1:])

        assert not tampered.verify("second")

    def test_tampered_root_fails(self):
        proof = dataclasses.replace(make_tree().prove("first"), root=FORGED_DIGEST)

        assert not proof.verify("first")
        assert not proof.check_proof_form(make_tree().root_hash, 3)

    def test_check_proof_form_rejects_wrong_height(self):
        tree = make_tree()
        proof = tree.prove("first")

        assert not proof.check_proof_form(tree.root_hash, tree.height + 1)

    def test_proof_is_immutable(self):
        proof = make_tree().prove("first")

        with pytest.raises(dataclasses.FrozenInstanceError):
            proof.root = FORGED_DIGEST

    def test_handmade_proof(self):
        """A proof assembled by hand verifies like a generated one."""
        a, b = hash_text("a"), hash_text("b")
        proof = MerkleProof(leaf=b, steps=((ProofSide.LEFT, a),), root=merkle_parent(a, b))

        assert proof.verify("b")
        assert proof.compute_root() == MerkleTree.construct(["a", "b"]).root_hash
