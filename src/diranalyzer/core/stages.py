"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Duplicate detection pipeline stages.

CLASS HIERARCHY
---------------
SizeStageImpl      : Candidate filter + exact-size pre-filter (single-threaded, no I/O)
ParallelHashStage  : Full-content hashing on a bounded thread pool
HashProgress       : Thread-safe completed/total counter shared by hashing workers

STAGE CONTRACTS
---------------
  • SizeStageImpl.process() returns only files whose size is shared by another candidate
  • ParallelHashStage.process() blocks until every submitted file is done, then returns
    the digest map in a deterministic order (first appearance in the input list)
  • A file that cannot be read is left out of the digest map and reported as failed;
    it never aborts the batch
  • Progress is reported as (stage name, completed, total) once per finished file
"""

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Dict, Optional, Tuple

from diranalyzer.core.digest_map import ConcurrentDigestMap
from diranalyzer.core.grouper import FileGrouperImpl
from diranalyzer.core.hasher import HasherImpl
from diranalyzer.core.interfaces import Hasher, ProgressCallback
from diranalyzer.core.models import FileRecord, Stage

logger = logging.getLogger(__name__)


def resolve_thread_count(thread_count: Optional[int] = None) -> int:
    """None or 0 means one worker per logical core. Never returns less than 1."""
    if thread_count is not None and thread_count < 0:
        raise ValueError("Thread count cannot be negative")
    if not thread_count:
        return os.cpu_count() or 1
    return thread_count


class HashProgress:
    """
    Monotonic completed/total counter.
    The callback is invoked under the lock, so observers never see the count go backwards.
    Every hashing worker waits while it runs: keep it cheap (update a counter, write one
    short line) and hand anything slower off to another thread.
    """

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None,
                 stage_name: str = Stage.HASH.value):
        self.total = total
        self._callback = callback
        self._stage_name = stage_name
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def advance(self) -> int:
        with self._lock:
            self._completed += 1
            current = self._completed
            if self._callback:
                self._callback(self._stage_name, current, self.total)
        return current


# =============================
# Individual Stages
# =============================
class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl = None, min_size: int = 0):
        if min_size < 0:
            raise ValueError("Minimum size cannot be negative")
        self.grouper = grouper or FileGrouperImpl()
        self.min_size = min_size

    def process(
            self,
            files: List[FileRecord],
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[FileRecord], List[FileRecord]]:
        """
        Returns (candidates, survivors): eligible files, and the subset sharing a size.
        """
        candidates = self.grouper.filter_candidates(files, self.min_size)
        survivors = self.grouper.size_bucket_survivors(candidates)

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        logger.debug(f"Size stage: {len(candidates)} candidates, {len(survivors)} share a size")
        return candidates, survivors


class ParallelHashStage:
    """
    Hashes every file on a fixed-size thread pool and collects digest -> paths.
    """

    def __init__(self, hasher: Hasher = None, thread_count: Optional[int] = None):
        self.hasher = hasher or HasherImpl()
        self.thread_count = resolve_thread_count(thread_count)

    def process(
            self,
            files: List[FileRecord],
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[Dict[str, List[str]], List[str]]:
        """
        Returns:
            (digest_map, failed_paths). digest_map lists digests by the input position of
            their first file, and paths within a digest in input order.
        """
        digest_map = ConcurrentDigestMap()
        progress = HashProgress(len(files), progress_callback)
        failed: List[str] = []

        if not files:
            return {}, failed

        start_time = time.time()
        with ThreadPoolExecutor(max_workers=self.thread_count, thread_name_prefix="hasher") as executor:
            futures = {
                executor.submit(self._hash_one, file, digest_map, progress): file
                for file in files
            }
            for future in as_completed(futures):
                if not future.result():
                    failed.append(futures[future].path)

        logger.debug(
            f"Hashed {len(files) - len(failed)}/{len(files)} files "
            f"with {self.thread_count} threads in {time.time() - start_time:.2f}s"
        )
        return self._ordered(digest_map, files), sorted(failed)

    def _hash_one(self, file: FileRecord, digest_map: ConcurrentDigestMap, progress: HashProgress) -> bool:
        try:
            digest = self.hasher.compute_digest(file.path)
        except OSError as e:
            logger.debug(f"Skipping unreadable file {file.path}: {e}")
            return False
        else:
            digest_map.add(digest, file.path)
            return True
        finally:
            progress.advance()

    @staticmethod
    def _ordered(digest_map: ConcurrentDigestMap, files: List[FileRecord]) -> Dict[str, List[str]]:
        position = {}
        for index, file in enumerate(files):
            position.setdefault(file.path, index)

        entries = [
            (digest, sorted(paths, key=position.__getitem__))
            for digest, paths in digest_map.items()
        ]
        entries.sort(key=lambda entry: position[entry[1][0]])
        return dict(entries)
