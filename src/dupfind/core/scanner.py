"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements file scanning functionality using pathlib.
Features:
- Recursively scans directories with os.walk
- Keeps regular files only (symlinks, FIFOs, sockets and devices are skipped)
- Applies optional size filters and excluded directories
- Skips unreadable entries instead of aborting the scan
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional

from dupfind.core.interfaces import FileScanner, ProgressCallback
from dupfind.core.models import File, SkippedEntry, InvalidRootError, Stage

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and collects every regular file with its size.

    Attributes:
        root_dir: Root directory to scan
        min_size: Minimum file size in bytes, inclusive (optional)
        max_size: Maximum file size in bytes, inclusive (optional)
        excluded_dirs: Directories whose subtrees are not entered
        skipped: Entries left out because they could not be accessed
    """

    def __init__(
        self,
        root_dir: str,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        excluded_dirs: Optional[List[str]] = None
    ):
        self.root_dir = root_dir
        self.min_size = min_size
        self.max_size = max_size
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.skipped: List[SkippedEntry] = []

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        """
        Single-pass scanner.
        Returns the list of regular files found in the directory tree.

        Raises:
            InvalidRootError: If the root does not exist or is not a directory.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Filters: min_size={self.min_size}, max_size={self.max_size}")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            raise InvalidRootError(f"Directory does not exist: {self.root_dir}")
        if not root_path.is_dir():
            raise InvalidRootError(f"Not a directory: {self.root_dir}")

        found_files = []
        processed_files = 0
        self.skipped = []

        # Progress throttling: update every N files
        progress_interval = 5000
        progress_counter = 0

        start_time = time.time()
        for root, dirs, files in os.walk(str(root_path), onerror=self._on_walk_error):
            dirs[:] = [d for d in dirs if self._prefilter_dirs(Path(root) / d)]

            for filename in files:
                file_info = self._process_file(Path(root) / filename)
                if file_info:
                    found_files.append(file_info)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= progress_interval:
                    progress_callback(Stage.SCAN.value, processed_files, None)
                    progress_counter = 0

        if progress_callback and progress_counter > 0:
            progress_callback(Stage.SCAN.value, processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} regular files, "
                     f"skipped {len(self.skipped)} entries.")
        return found_files

    def _skip(self, path: str, reason: str) -> None:
        logger.warning(f"Skipping {path}: {reason}")
        self.skipped.append(SkippedEntry(path=path, reason=reason, stage=Stage.SCAN.value))

    def _on_walk_error(self, error: OSError) -> None:
        """os.walk could not list a directory."""
        self._skip(str(error.filename), error.strerror or str(error))

    @staticmethod
    def _is_excluded_directory(path: Path, excluded_dirs: List[str]) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(path.resolve(strict=False))
        except (OSError, ValueError):
            return False
        for excluded_dir in excluded_dirs:
            normalized_excluded = os.path.normpath(excluded_dir)
            if path_str.startswith(normalized_excluded + os.sep) or path_str == normalized_excluded:
                return True
        return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Decides whether os.walk should descend into a subdirectory."""
        if path.is_symlink():
            logger.debug(f"Skipping symbolic link to directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path, self.excluded_dirs):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        return True

    def _process_file(self, path: Path) -> Optional[File]:
        """
        Process an individual directory entry and return a File if it is a
        regular file that passes the size filters.
        """
        try:
            st = path.lstat()
        except OSError as e:
            self._skip(str(path), e.strerror or str(e))
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return None

        size = st.st_size
        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None

        return File(path=str(path), size=size)

    def _size_passes(self, size: int) -> bool:
        """
        Check if file size is within configured limits.
        """
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
