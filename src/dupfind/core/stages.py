"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate detection engine.

CLASS HIERARCHY
---------------
SizeStageImpl     : Initial size-based grouping (SizeStage interface)
HashStageBase     : Shared loop for stages that split groups by a fingerprint
PartialHashStage  : Splits by fingerprint of the first PARTIAL_HASH_SIZE bytes
FullHashStage     : Final confirmation by fingerprint of the whole content

STAGE CONTRACTS
---------------
Each hash stage implements a consistent `process()` interface that:
  • Accepts candidate groups from previous stage
  • Returns refined groups for next stage
  • Appends confirmed duplicates to shared list
  • Reports unreadable files through on_skip
  • Reports progress via callback (stage name, processed count, total count)

OPTIMIZATIONS
-------------
• Progressive refinement: the partial stage reads at most PARTIAL_HASH_SIZE
  bytes per file, so same-size files with different beginnings never get
  read in full.
• Early confirmation: files no larger than PARTIAL_HASH_SIZE are fully covered
  by the partial fingerprint and are confirmed without a second read.
"""

import logging
from typing import List, Dict, Optional

from dupfind.core.grouper import FileGrouperImpl
from dupfind.core.interfaces import SizeStage, HashStage, ProgressCallback, SkipCallback
from dupfind.core.models import File, DuplicateGroup, DeduplicationConfig, Stage

logger = logging.getLogger(__name__)


class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[File],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of DuplicateGroups with 2+ files of same size,
        largest size first, members ordered by path.
        """
        size_groups = self.grouper.group_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=sorted(files_list, key=lambda f: f.path))
            for size, files_list in sorted(size_groups.items(), reverse=True)
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        logger.debug(f"Size stage: {len(files)} files -> {len(groups)} size group(s)")
        return groups


class HashStageBase(HashStage):
    """
    Base class for stages that split groups by a content fingerprint.
    Subclasses choose the fingerprint and which matches are final.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        raise NotImplementedError

    def _group_files(self, files: List[File], on_skip: Optional[SkipCallback]) -> Dict[str, List[File]]:
        raise NotImplementedError

    def _is_final(self, group: DuplicateGroup) -> bool:
        """True if a match at this stage already proves identical content."""
        raise NotImplementedError

    def process(
        self,
        groups: List[DuplicateGroup],
        confirmed_duplicates: List[DuplicateGroup],
        on_skip: Optional[SkipCallback] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        new_potential_groups = []
        total_files = sum(len(group.files) for group in groups)
        processed_files = 0

        for group in groups:
            hash_groups = self._group_files(group.files, on_skip)

            for files_in_group in hash_groups.values():
                subgroup = DuplicateGroup(size=group.size, files=files_in_group)
                if self._is_final(subgroup):
                    confirmed_duplicates.append(subgroup)
                else:
                    new_potential_groups.append(subgroup)

            processed_files += len(group.files)
            if progress_callback:
                progress_callback(self.get_stage_name(), processed_files, total_files)

        logger.debug(
            f"{self.get_stage_name()}: {total_files} files -> "
            f"{len(new_potential_groups)} candidate group(s), "
            f"{len(confirmed_duplicates)} confirmed so far"
        )
        return new_potential_groups


class PartialHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.PARTIAL.value

    def get_threshold(self) -> int:
        """Files up to this size are entirely covered by the partial fingerprint."""
        return DeduplicationConfig.PARTIAL_HASH_SIZE

    def _group_files(self, files: List[File], on_skip: Optional[SkipCallback]) -> Dict[str, List[File]]:
        return self.grouper.group_by_partial_hash(files, on_skip)

    def _is_final(self, group: DuplicateGroup) -> bool:
        return group.size <= self.get_threshold()


class FullHashStage(HashStageBase):
    def get_stage_name(self) -> str:
        return Stage.FULL.value

    def _group_files(self, files: List[File], on_skip: Optional[SkipCallback]) -> Dict[str, List[File]]:
        return self.grouper.group_by_full_hash(files, on_skip)

    def _is_final(self, group: DuplicateGroup) -> bool:
        return True
