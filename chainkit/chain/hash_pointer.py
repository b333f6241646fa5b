"""
Module 04 - Hash Pointer

An owned value bundled with the digest taken when it was wrapped. The value
is deep-copied on the way in so no outside reference can alias it, and there
is no setter; verify() catches anything that mutates it anyway.
"""
from __future__ import annotations

import copy
from typing import Any, Generic, TypeVar

from chainkit.crypto.hashable import hash_value


T = TypeVar("T")


class HashPointer(Generic[T]):
    """Exclusive owner of one value plus an immutable digest snapshot."""

    __slots__ = ("_value", "_digest")

    def __init__(self, value: T) -> None:
        self._value: T = copy.deepcopy(value)
        self._digest: str = hash_value(self._value)

    @classmethod
    def to(cls, value: T) -> "HashPointer[T]":
        return cls(value)

    @property
    def digest(self) -> str:
        """Digest snapshot taken at construction."""
        return self._digest

    def get(self) -> T:
        """Read access to the pointee."""
        return self._value

    def verify(self) -> bool:
        """Recompute the pointee's digest and compare it to the snapshot."""
        return hash_value(self._value) == self._digest

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, HashPointer):
            return NotImplemented
        return self._digest == other._digest

    def __hash__(self) -> int:
        return hash(self._digest)

    def __repr__(self) -> str:
        return f"HashPointer(digest={self._digest[:12]}...)"


__all__ = ["HashPointer"]
