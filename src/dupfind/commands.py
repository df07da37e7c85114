"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

commands.py
Command orchestrator for a duplicate scan: scan → pipeline → report.
"""
from typing import List, Optional

from dupfind.core.assembler import assemble_report
from dupfind.core.deduplicator import DeduplicatorImpl
from dupfind.core.grouper import FileGrouperImpl
from dupfind.core.interfaces import ProgressCallback
from dupfind.core.models import DeduplicationParams, DuplicateReport, File
from dupfind.core.scanner import FileScannerImpl


class DeduplicationCommand:
    """
    Orchestrates the entire workflow:
    1. Scan the root directory for regular files
    2. Run size → partial hash → full hash pipeline
    3. Assemble the report with wasted space

    Usage:
        params = DeduplicationParams(root_dir="/data", max_workers=4)
        report = DeduplicationCommand().execute(params, progress_callback=printer)
    """

    def __init__(self):
        self._files: List[File] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> DuplicateReport:
        """
        Execute a duplicate scan with given parameters.

        Raises:
            InvalidRootError: If the root is missing or not a directory
        """
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
            excluded_dirs=params.excluded_dirs
        )
        self._files = scanner.scan(progress_callback=progress_callback)

        deduplicator = DeduplicatorImpl(FileGrouperImpl(max_workers=params.max_workers))
        groups, stats = deduplicator.find_duplicates(self._files, progress_callback=progress_callback)

        # Scanner skips come first: they happened first
        stats.skipped[:0] = scanner.skipped
        return assemble_report(groups, stats)

    def get_files(self) -> List[File]:
        """Get scanned files after execution."""
        return self._files.copy()
