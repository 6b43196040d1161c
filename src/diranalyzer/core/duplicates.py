"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

duplicates.py
Pipeline-based exact duplicate detection:
    size filter → size buckets → parallel full-content hash → digest groups
"""
import logging
import time
from typing import List, Tuple, Optional

from diranalyzer.core.grouper import FileGrouperImpl
from diranalyzer.core.hasher import HasherImpl
from diranalyzer.core.interfaces import DuplicateFinder, HashAlgorithm, ProgressCallback
from diranalyzer.core.models import (
    FileRecord, DuplicateGroup, DuplicateStats, Stage, DEFAULT_MIN_DUPLICATE_SIZE)
from diranalyzer.core.stages import SizeStageImpl, ParallelHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Duplicate Finder Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Finds byte-identical files among scanned FileRecords and collects statistics.
    Only the hashing stage runs in parallel; grouping starts after the pool has drained.
    """
    def __init__(
        self,
        min_size: int = DEFAULT_MIN_DUPLICATE_SIZE,
        thread_count: Optional[int] = None,
        algorithm: Optional[HashAlgorithm] = None,
        grouper: Optional[FileGrouperImpl] = None
    ):
        self.grouper = grouper or FileGrouperImpl()
        self.size_stage = SizeStageImpl(self.grouper, min_size=min_size)
        self.hash_stage = ParallelHashStage(HasherImpl(algorithm), thread_count=thread_count)

    @property
    def thread_count(self) -> int:
        return self.hash_stage.thread_count

    def find_duplicates(
        self,
        files: List[FileRecord],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DuplicateStats]:
        """
        Args:
            files: Scanned file records (symlinks and small files are filtered here)
            progress_callback: (stage, current, total), reported once per hashed file
        Returns:
            Tuple[List[DuplicateGroup], DuplicateStats], groups sorted by wasted space
        """
        stats = DuplicateStats()
        total_start_time = time.time()

        start_time = time.time()
        candidates, survivors = self.size_stage.process(files, progress_callback=progress_callback)
        stats.record_stage(Stage.SIZE.value, time.time() - start_time)
        stats.candidates = len(candidates)
        stats.size_bucket_survivors = len(survivors)

        if not survivors:
            stats.total_time = time.time() - total_start_time
            return [], stats

        start_time = time.time()
        digest_map, failed = self.hash_stage.process(survivors, progress_callback=progress_callback)
        stats.record_stage(Stage.HASH.value, time.time() - start_time)
        stats.failed = len(failed)
        stats.hashed = len(survivors) - len(failed)
        if failed:
            logger.warning(f"Could not read {len(failed)} file(s) while hashing; they were skipped")

        start_time = time.time()
        sizes = {f.path: f.size for f in survivors}
        groups = self.grouper.build_duplicate_groups(digest_map, sizes)
        stats.record_stage(Stage.GROUP.value, time.time() - start_time)
        stats.groups = len(groups)

        stats.total_time = time.time() - total_start_time
        return groups, stats


def find_duplicates(
    files: List[FileRecord],
    min_size: int = DEFAULT_MIN_DUPLICATE_SIZE,
    thread_count: Optional[int] = None,
    progress_callback: Optional[ProgressCallback] = None
) -> List[DuplicateGroup]:
    """Blocking convenience wrapper: returns once every candidate has been hashed."""
    groups, _ = DuplicateFinderImpl(min_size=min_size, thread_count=thread_count).find_duplicates(
        files, progress_callback=progress_callback
    )
    return groups
