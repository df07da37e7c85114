"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate detection engine.

Key Components:
---------------
- HashAlgorithm: Block primitive reducing a chunk of bytes to a 64-bit integer.
- Hasher: Computes partial and full content fingerprints of files.
- FileScanner: Scans directories and returns regular files with their sizes.
- FileGrouper: Groups files by size or fingerprint values.
- SizeStage / HashStage: Individual stages in the duplicate detection pipeline.
- Deduplicator: Main engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable
from dupfind.core.models import File, DuplicateGroup, DeduplicationStats

ProgressCallback = Callable[[str, int, Optional[int]], None]
SkipCallback = Callable[[File, str], None]


class HashAlgorithm(Protocol):
    """
    Interface for block hash algorithms.

    Allows plugging in a different fast hash without affecting the
    accumulator scheme or the rest of the pipeline.
    """

    @staticmethod
    def hash(data: bytes) -> int:
        """Computes an unsigned 64-bit hash of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting a bounded prefix or the whole content of a file."""
    def compute_hash(self, path: str, limit: Optional[int] = None) -> str: ...
    def compute_partial_hash(self, file: File) -> str: ...
    def compute_full_hash(self, file: File) -> str: ...


class FileScanner(Protocol):
    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        """
        Scan the configured directory tree.

        Returns:
            All regular files that passed the configured filters.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files by size or content fingerprint.
    Every method returns only groups with 2+ files.
    """
    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]:
        ...

    def group_by_partial_hash(
        self, files: List[File], on_skip: Optional[SkipCallback] = None
    ) -> Dict[str, List[File]]:
        ...

    def group_by_full_hash(
        self, files: List[File], on_skip: Optional[SkipCallback] = None
    ) -> Dict[str, List[File]]:
        ...


# =============================
# Stage Interfaces
# =============================

class SizeStage(Protocol):
    def process(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group files by size to find initial duplicate candidates.

        Returns:
            List of groups where each contains 2+ files of the same size.
        """
        ...


class HashStage(Protocol):
    """
    Interface for a stage that splits candidate groups by a content fingerprint.
    """

    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and stats)."""
        ...

    def process(
        self,
        groups: List[DuplicateGroup],
        confirmed_duplicates: List[DuplicateGroup],
        on_skip: Optional[SkipCallback] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Process groups through this stage.

        Args:
            groups: Current groups of potential duplicates.
            confirmed_duplicates: List to append newly confirmed duplicates to.
            on_skip: Called for every file that could not be fingerprinted.
            progress_callback: Optional callback (stage, current, total).

        Returns:
            Refined candidate groups to pass to the next stage.
        """
        ...


class Deduplicator(Protocol):
    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Run the full pipeline: size → partial hash → full hash.

        Returns:
            A tuple of confirmed duplicate groups and collected statistics.
        """
        ...
