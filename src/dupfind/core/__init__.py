"""
Core duplicate detection engine — scanner, hasher, grouper, stages and report assembly.

- FileScannerImpl: recursive directory traversal collecting regular files and sizes
- HasherImpl + XXHashAlgorithmImpl: two-accumulator fingerprints over xxHash64 blocks
- FileGrouperImpl: size and fingerprint grouping with singleton pruning
- DeduplicatorImpl: pipeline (size → partial hash → full hash)
- assemble_report: final duplicate groups with wasted space
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .deduplicator import DeduplicatorImpl
from .assembler import assemble_report
from .models import (
    File, DuplicateGroup, DuplicateReport, DeduplicationConfig, DeduplicationParams,
    DeduplicationStats, SkippedEntry, InvalidRootError)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "DeduplicatorImpl",
    "assemble_report",
    "File",
    "DuplicateGroup",
    "DuplicateReport",
    "DeduplicationConfig",
    "DeduplicationParams",
    "DeduplicationStats",
    "SkippedEntry",
    "InvalidRootError",
]
