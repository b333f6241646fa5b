"""
Module 04 - Hash Pointer Unit Tests
Tests for chainkit/chain/hash_pointer.py
"""
import pytest

from chainkit.chain import HashPointer
from chainkit.crypto import hash_value
from chainkit.crypto.hashing import hash_text
from chainkit.schemas.errors import CanonicalizationException

from fixtures import FORGED_DIGEST


class TestConstruction:
    """Tests for wrapping values."""

    def test_digest_is_hash_of_value(self):
        pointer = HashPointer("payload")

        assert pointer.digest == hash_text("payload")

    def test_get_returns_value(self):
        pointer = HashPointer({"amount": 5})

        assert pointer.get() == {"amount": 5}

    def test_to_is_constructor_alias(self):
        assert HashPointer.to([1, 2, 3]) == HashPointer([1, 2, 3])

    def test_value_is_copied_on_wrap(self):
        """Mutating the caller's object after wrapping does not reach the pointee."""
        value = {"items": [1]}
        pointer = HashPointer(value)

        value["items"].append(2)

        assert pointer.get() == {"items": [1]}
        assert pointer.verify()

    def test_unhashable_value_raises(self):
        with pytest.raises(CanonicalizationException):
            HashPointer(object())


class TestVerify:
    """Tests for HashPointer.verify()."""

    def test_fresh_pointer_verifies(self):
        assert HashPointer(["a", "b"]).verify()

    def test_mutation_through_get_is_detected(self):
        pointer = HashPointer({"owner": "alice"})

        pointer.get()["owner"] = "mallory"

        assert not pointer.verify()

    def test_replaced_value_is_detected(self):
        pointer = HashPointer("original")

        pointer._value = "swapped"

        assert not pointer.verify()

    def test_digest_is_read_only(self):
        pointer = HashPointer("original")

        with pytest.raises(AttributeError):
            pointer.digest = FORGED_DIGEST

    def test_no_extra_attributes(self):
        pointer = HashPointer("original")

        with pytest.raises(AttributeError):
            pointer.value = "other"

    def test_digest_snapshot_survives_mutation(self):
        """The snapshot keeps the digest taken at construction."""
        pointer = HashPointer([1])
        original = hash_value([1])

        pointer.get().append(2)

        assert pointer.digest == original


class TestEquality:
    """Tests for __eq__ and __hash__."""

    def test_equal_values_equal_pointers(self):
        assert HashPointer({"a": 1, "b": 2}) == HashPointer({"b": 2, "a": 1})

    def test_different_values_differ(self):
        assert HashPointer("a") != HashPointer("b")

    def test_usable_in_sets(self):
        pointers = {HashPointer("a"), HashPointer("a"), HashPointer("b")}

        assert len(pointers) == 2

    def test_not_equal_to_raw_digest(self):
        assert HashPointer("a") != hash_text("a")
