"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration for file scanning and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable
import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


# =============================
# Errors
# =============================

class InvalidRootError(RuntimeError):
    """Root directory does not exist or is not a directory."""


# =============================
# Enums and Config
# =============================

class Stage(str, Enum):
    SCAN = "Scanning"
    SIZE = "Size grouping"
    PARTIAL = "Partial Hash"
    FULL = "Full Hash"


class DeduplicationConfig:
    PARTIAL_HASH_SIZE = 4096  # Bytes fingerprinted by the partial stage
    READ_BLOCK_SIZE = 8192    # Bytes per read while fingerprinting
    DEFAULT_MAX_WORKERS = min(8, os.cpu_count() or 1)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class File:
    """
    A regular file captured during scanning: its path and its size in bytes.
    Never updated afterwards, even if the file changes on disk.
    """
    path: str
    size: int  # in bytes

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class SkippedEntry:
    """A file or directory left out of the results, and why."""
    path: str
    reason: str
    stage: str


@dataclass
class DuplicateGroup:
    """
    A group of files that are potential duplicates.
    All files in the group have the same size and matching fingerprints.
    """
    size: int
    files: List[File]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def wasted_space(self) -> int:
        """Bytes taken by every copy except one."""
        if not self.files:
            return 0
        return self.size * (len(self.files) - 1)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def add_file(self, file: File) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.skipped: List[SkippedEntry] = []
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception as e:
                logger.warning(f"Error in stats event handler: {e}")

    def record_skip(self, path: str, reason: str, stage: str) -> None:
        """Remembers a file that could not take part in grouping."""
        self.skipped.append(SkippedEntry(path=path, reason=reason, stage=stage))

    def print_summary(self) -> str:
        labels = {
            "size": "Size Groups",
            "partial": "Partial Hash Groups",
            "full": "Full Content Hash Groups",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.skipped:
            lines.append(f"Skipped entries: {len(self.skipped)}")

        return "\n".join(lines)


@dataclass
class DuplicateReport:
    """
    Final result of a run: confirmed duplicate groups and the space they waste.
    """
    groups: List[DuplicateGroup]
    total_wasted: int
    stats: DeduplicationStats = field(default_factory=DeduplicationStats)

    @property
    def total_files(self) -> int:
        return sum(len(g.files) for g in self.groups)

    @property
    def skipped(self) -> List[SkippedEntry]:
        return self.stats.skipped


@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run with validation."""
    root_dir: str
    min_size_bytes: Optional[int] = None
    max_size_bytes: Optional[int] = None
    excluded_dirs: List[str] = field(default_factory=list)
    max_workers: int = 1

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes is not None and self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None:
            if self.max_size_bytes < 0:
                raise ValueError("Maximum size cannot be negative")
            if self.min_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
                raise ValueError("Maximum size cannot be less than minimum size")

        if self.max_workers < 1:
            raise ValueError("Number of workers must be at least 1")
