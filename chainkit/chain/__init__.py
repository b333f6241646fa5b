"""
Module 04 - Hash Pointers and Blockchain
"""
from .hash_pointer import HashPointer
from .blockchain import Block, Blockchain, block_digest

__all__ = [
    "HashPointer",
    "Block",
    "Blockchain",
    "block_digest",
]
