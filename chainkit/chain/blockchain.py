"""
Module 04 - Blockchain
Append-only sequence of blocks chained by hash pointers.

Block digest rule (hard contract):
    digest = sha256(dumps_canonical({
        "index": index,
        "payload": hash_value(payload),
        "payload_type": type_tag(payload),
        "previous": previous block digest, or the genesis marker,
    }))

Only the tail of the chain can be extended. Validation walks the blocks in
order and reports the first broken link or digest together with the index
of the block where it was found.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

from chainkit.chain.hash_pointer import HashPointer
from chainkit.config.runtime import get_default_config
from chainkit.crypto.hashable import hash_value, type_tag
from chainkit.crypto.hashing import hash_canonical, is_digest
from chainkit.schemas.verification import ValidationResult


logger = logging.getLogger(__name__)

T = TypeVar("T")


def block_digest(index: int, payload: Any, previous: str) -> str:
    """
    Compute a block digest from its index, payload and previous digest.

    The payload type is committed alongside its digest, so swapping a payload
    for a different type with the same digest (2 for "2") is detected.
    """
    return hash_canonical(
        {
            "index": index,
            "payload": hash_value(payload),
            "payload_type": type_tag(payload),
            "previous": previous,
        }
    )


@dataclass
class Block(Generic[T]):
    """
    One block of a chain.

    Attributes:
        index: Position in the chain, 0 for the genesis block
        payload: The block's content (owned copy)
        digest: block_digest(index, payload, previous digest or genesis marker)
        previous: Hash pointer to the previous block's digest; None for genesis
    """
    index: int
    payload: T
    digest: str
    previous: HashPointer[str] | None = None

    @property
    def is_genesis(self) -> bool:
        return self.previous is None

    @property
    def previous_digest(self) -> str | None:
        return None if self.previous is None else self.previous.get()


class Blockchain(Generic[T]):
    """
    Append-only chain of blocks.

    Usage:
        chain = Blockchain()
        for payload in ["a", "b", "c"]:
            chain.append(payload)
        assert chain.validate_chain().ok
    """

    def __init__(self, genesis_marker: str | None = None) -> None:
        marker = genesis_marker
        if marker is None:
            marker = get_default_config().genesis_marker
        if not is_digest(marker):
            raise ValueError(f"Genesis marker must be a hex digest, got {marker!r}")
        self._genesis_marker = marker
        self._blocks: list[Block[T]] = []

    @property
    def genesis_marker(self) -> str:
        return self._genesis_marker

    @property
    def head(self) -> Block[T] | None:
        return self._blocks[-1] if self._blocks else None

    @property
    def head_digest(self) -> str:
        """Digest the next block will point to."""
        return self._blocks[-1].digest if self._blocks else self._genesis_marker

    @property
    def blocks(self) -> tuple[Block[T], ...]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block[T]]:
        return iter(self._blocks)

    def __getitem__(self, index: int) -> Block[T]:
        return self._blocks[index]

    def __repr__(self) -> str:
        return f"Blockchain(blocks={len(self._blocks)}, head={self.head_digest[:12]}...)"

    def append(self, payload: T) -> Block[T]:
        """
        Extend the chain with a new block holding a copy of ``payload``.

        Raises:
            CanonicalizationException: If the payload cannot be hashed. The
                chain is left unchanged.
        """
        payload = copy.deepcopy(payload)
        head = self.head
        if head is None:
            index = 0
            previous = None
        else:
            index = head.index + 1
            previous = HashPointer(head.digest)

        digest = block_digest(index, payload, self.head_digest)
        block = Block(index=index, payload=payload, digest=digest, previous=previous)
        self._blocks.append(block)

        logger.debug(f"Appended block {index} with digest {digest[:12]}")
        return block

    def validate_chain(self) -> ValidationResult:
        """
        Walk the chain recomputing every digest and checking every link.

        For each block the link is checked first (sequence, pointer integrity,
        pointer target), then the digest. The first failure wins.
        """
        previous_digest = self._genesis_marker
        for position, block in enumerate(self._blocks):
            failure = self._check_link(position, block, previous_digest)
            if failure is None:
                expected = block_digest(block.index, block.payload, previous_digest)
                if expected != block.digest:
                    failure = ValidationResult.invalid_hash(
                        "Block digest does not match its contents", position=position
                    )
            if failure is not None:
                logger.warning(
                    f"Chain validation failed: {failure.status.value} "
                    f"at block {position}: {failure.message}"
                )
                return failure
            previous_digest = block.digest
        return ValidationResult.valid()

    @staticmethod
    def _check_link(position: int, block: Block[T], previous_digest: str) -> ValidationResult | None:
        if block.index != position:
            return ValidationResult.invalid_link(
                f"Block index {block.index} out of sequence", position=position
            )
        if position == 0:
            if block.previous is not None:
                return ValidationResult.invalid_link(
                    "Genesis block must not reference a previous block", position=position
                )
            return None
        if block.previous is None:
            return ValidationResult.invalid_link(
                "Block has no hash pointer to its predecessor", position=position
            )
        if not block.previous.verify():
            return ValidationResult.invalid_link(
                "Hash pointer to the previous block was tampered with", position=position
            )
        if block.previous.get() != previous_digest:
            return ValidationResult.invalid_link(
                "Block does not reference the previous block's digest", position=position
            )
        return None


__all__ = ["Block", "Blockchain", "block_digest"]
