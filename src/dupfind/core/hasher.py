"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements content fingerprints using pluggable block hash algorithms.

A fingerprint is built by reading the file in fixed-size blocks, reducing each
block to a 64-bit integer with the block algorithm and folding it into two
independent 64-bit accumulators. The result is both accumulators as 32 hex chars.

- compute_partial_hash: first PARTIAL_HASH_SIZE bytes (whole file if shorter)
- compute_full_hash: entire file content
- Unreadable files produce the empty string instead of raising
"""

import logging
from typing import Optional

import xxhash

from dupfind.core.interfaces import Hasher, HashAlgorithm
from dupfind.core.models import File, DeduplicationConfig

logger = logging.getLogger(__name__)

MASK64 = 0xFFFFFFFFFFFFFFFF
GOLDEN_RATIO = 0x9E3779B9
UNREADABLE = ""


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> int:
        return xxhash.xxh64_intdigest(data)


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Stateless: the same hasher may be shared by several worker threads.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None,
                 block_size: int = DeduplicationConfig.READ_BLOCK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.block_size = block_size

    def compute_hash(self, path: str, limit: Optional[int] = None) -> str:
        """
        Fingerprints the first `limit` bytes of a file, or all of it when limit is None.

        Returns:
            32 lowercase hex characters, or UNREADABLE ("") if the file cannot be read.
            A zero-byte range yields "0" * 32.
        """
        acc1 = 0
        acc2 = 0
        total_read = 0
        try:
            with open(path, 'rb') as f:
                while True:
                    to_read = self.block_size
                    if limit is not None:
                        to_read = min(to_read, limit - total_read)
                        if to_read <= 0:
                            break

                    chunk = f.read(to_read)
                    if not chunk:
                        break

                    block = self.algorithm.hash(chunk)
                    acc1 ^= (block + GOLDEN_RATIO + (acc1 << 6) + (acc1 >> 2)) & MASK64
                    acc2 = (acc2 * 31 + block) & MASK64
                    total_read += len(chunk)
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            return UNREADABLE

        return f"{acc1:016x}{acc2:016x}"

    def compute_partial_hash(self, file: File) -> str:
        """Fingerprint of the first PARTIAL_HASH_SIZE bytes."""
        return self.compute_hash(file.path, DeduplicationConfig.PARTIAL_HASH_SIZE)

    def compute_full_hash(self, file: File) -> str:
        """Fingerprint of the entire file content."""
        return self.compute_hash(file.path)
