"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping by size and by content fingerprint.
Keys are computed sequentially or in a bounded thread pool and always
reduced in input order, so both modes give identical results.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Tuple, Any, Callable, Optional

from dupfind.core.hasher import HasherImpl, UNREADABLE
from dupfind.core.interfaces import FileGrouper, Hasher, SkipCallback
from dupfind.core.models import File

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Optional[Hasher] = None, max_workers: int = 1):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.max_workers = max_workers

    def group_by_size(self, files: List[File]) -> Dict[int, List[File]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size, max_workers=1)

    def group_by_partial_hash(
            self, files: List[File], on_skip: Optional[SkipCallback] = None
    ) -> Dict[str, List[File]]:
        """Groups files by the fingerprint of their first bytes."""
        return self._group_by(files, self.hasher.compute_partial_hash, on_skip, self.max_workers)

    def group_by_full_hash(
            self, files: List[File], on_skip: Optional[SkipCallback] = None
    ) -> Dict[str, List[File]]:
        """Groups files by full content fingerprint."""
        return self._group_by(files, self.hasher.compute_full_hash, on_skip, self.max_workers)

    @staticmethod
    def _group_by(
            files: List[File],
            key_func: Callable[[File], Any],
            on_skip: Optional[SkipCallback] = None,
            max_workers: int = 1
    ) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a File.
                      None or "" means the file could not be processed.
            on_skip: Called with (file, reason) for every file left out
            max_workers: Threads used to compute keys
        Returns:
            Dict[key, List[File]] holding only groups with 2+ files
        """
        def safe_key(file: File) -> Tuple[Any, Optional[str]]:
            try:
                return key_func(file), None
            except Exception as e:
                return None, str(e)

        if max_workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=min(max_workers, len(files))) as executor:
                results = list(executor.map(safe_key, files))
        else:
            results = [safe_key(f) for f in files]

        groups = defaultdict(list)
        skipped_files = 0
        for file, (key, error) in zip(files, results):
            if error is None and key is not None and key != UNREADABLE:
                groups[key].append(file)
                continue

            skipped_files += 1
            reason = error or "unreadable"
            if error:
                logger.warning(f"Error processing {file.path}: {error}")
            if on_skip:
                on_skip(file, reason)

        if skipped_files > 0:
            logger.warning(f"Skipped {skipped_files} files due to hash computation errors")

        # Avoid groups with less than 2 files
        return {key: group for key, group in groups.items() if len(group) >= 2}
