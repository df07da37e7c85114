"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/assembler.py
Turns confirmed duplicate groups into the final report.
"""

from typing import List, Optional

from dupfind.core.models import DuplicateGroup, DuplicateReport, DeduplicationStats


def _check_group(group: DuplicateGroup) -> None:
    if len(group.files) < 2:
        raise ValueError(f"Duplicate group must contain at least 2 files, got {len(group.files)}")
    for file in group.files:
        if file.size != group.size:
            raise ValueError(
                f"Size mismatch in duplicate group: {file.path} has {file.size} bytes, "
                f"group has {group.size}"
            )


def assemble_report(
        groups: List[DuplicateGroup],
        stats: Optional[DeduplicationStats] = None
) -> DuplicateReport:
    """
    Validates every group and computes the wasted space.

    Groups are ordered by wasted space, then size (both descending), then
    first path; files inside a group are ordered by path.

    Raises:
        ValueError: If a group has fewer than 2 files or mixed sizes.
    """
    assembled = []
    for group in groups:
        _check_group(group)
        assembled.append(DuplicateGroup(size=group.size, files=sorted(group.files, key=lambda f: f.path)))

    assembled.sort(key=lambda g: (-g.wasted_space, -g.size, g.files[0].path))
    total_wasted = sum(g.wasted_space for g in assembled)

    return DuplicateReport(
        groups=assembled,
        total_wasted=total_wasted,
        stats=stats or DeduplicationStats()
    )
