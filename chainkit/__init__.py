"""
chainkit - tamper-evident data structures for blockchain-style applications.

- MerkleTree: sorted Merkle tree with O(log n) search, pruning and validation
- HashPointer: owned value bundled with its digest
- Blockchain: append-only chain of hash-pointer-linked blocks
"""

from chainkit.chain import Block, Blockchain, HashPointer, block_digest
from chainkit.config import RuntimeConfig, configure_logging, setup_logging
from chainkit.crypto import ContentHashable, hash_value
from chainkit.merkle import MerkleProof, MerkleTree, ProofSide, verify_merkle_proof
from chainkit.schemas import (
    ChainkitError,
    ChainkitException,
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    PrunedTreeSearchException,
    StructuralException,
    ValidationResult,
    ValidationStatus,
)

__version__ = "0.1.0"

__all__ = [
    "Block",
    "Blockchain",
    "HashPointer",
    "block_digest",
    "RuntimeConfig",
    "configure_logging",
    "setup_logging",
    "ContentHashable",
    "hash_value",
    "MerkleProof",
    "MerkleTree",
    "ProofSide",
    "verify_merkle_proof",
    "ChainkitError",
    "ChainkitException",
    "CanonicalizationException",
    "EmptyInputException",
    "ErrorCodes",
    "PrunedTreeSearchException",
    "StructuralException",
    "ValidationResult",
    "ValidationStatus",
]
