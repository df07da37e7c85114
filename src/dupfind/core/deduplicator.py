"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deduplicator.py
Implements the pipeline-based duplicate detection:
    size → partial hash → full hash
"""
import time
import logging
from typing import List, Tuple, Optional

from dupfind.core.grouper import FileGrouperImpl
from dupfind.core.interfaces import Deduplicator, HashStage, ProgressCallback
from dupfind.core.models import File, DuplicateGroup, DeduplicationStats
from dupfind.core.stages import SizeStageImpl, PartialHashStage, FullHashStage

logger = logging.getLogger(__name__)


class DeduplicatorImpl(Deduplicator):
    """
    Runs the multi-stage duplicate detection pipeline and collects statistics.
    """
    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()

    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main pipeline.
        Args:
            files: Scanned files
            progress_callback: Reports progress per stage.
        Returns:
            Tuple[confirmed duplicate groups, DeduplicationStats]
        """
        stats = DeduplicationStats()
        total_start_time = time.time()

        def on_skip(file: File, reason: str, stage: str) -> None:
            stats.record_skip(file.path, reason, stage)

        size_stage = SizeStageImpl(self.grouper)
        start_time = time.time()
        groups = size_stage.process(files, progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, "size", time.time() - start_time, groups, [])

        confirmed_duplicates: List[DuplicateGroup] = []

        for stage_name, stage in self._build_pipeline():
            start_time = time.time()
            groups = stage.process(
                groups,
                confirmed_duplicates,
                on_skip=lambda f, reason, s=stage.get_stage_name(): on_skip(f, reason, s),
                progress_callback=progress_callback
            )
            duration = time.time() - start_time
            DeduplicatorImpl._update_stats(stats, stage_name, duration, groups, confirmed_duplicates)

        stats.total_time = time.time() - total_start_time
        logger.debug(f"Pipeline finished: {len(confirmed_duplicates)} duplicate group(s) "
                     f"in {stats.total_time:.3f}s")
        return confirmed_duplicates, stats

    def _build_pipeline(self) -> List[Tuple[str, HashStage]]:
        return [
            ("partial", PartialHashStage(self.grouper)),
            ("full", FullHashStage(self.grouper)),
        ]

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: str,
        duration: float,
        groups: List[DuplicateGroup],
        confirmed_duplicates: List[DuplicateGroup]
    ):
        """
        Includes both unconfirmed and confirmed groups in stats.
        """
        total_files = sum(len(g.files) for g in groups) + sum(len(g.files) for g in confirmed_duplicates)
        total_groups = len(groups) + len(confirmed_duplicates)
        stats.update_stage(
            stage_name=stage,
            groups_found=total_groups,
            files_processed=total_files,
            duration=duration
        )
