"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Grouping strategies for duplicate detection: candidate filtering, exact-size
buckets before hashing, and digest buckets into DuplicateGroups after hashing.
"""

import logging
import os
from collections import defaultdict
from typing import List, Dict, Any, Callable, Mapping, Sequence

from diranalyzer.core.models import FileRecord, DuplicateGroup

logger = logging.getLogger(__name__)


class FileGrouperImpl:
    """
    Pure in-memory grouping, no I/O. Runs on the calling thread.
    """

    @staticmethod
    def filter_candidates(files: List[FileRecord], min_size: int) -> List[FileRecord]:
        """Files eligible for hashing: at least min_size bytes and not a symlink."""
        seen = set()
        candidates = []
        for file in files:
            if file.size < min_size or file.is_symlink or file.path in seen:
                continue
            seen.add(file.path)
            candidates.append(file)
        return candidates

    def group_by_size(self, files: List[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Groups files by exact size, keeping only sizes shared by 2+ files."""
        return self._group_by(files, lambda f: f.size)

    def size_bucket_survivors(self, files: List[FileRecord]) -> List[FileRecord]:
        """
        Flattens the size buckets back into a list, preserving input order.
        Files with a unique size cannot have a duplicate and are dropped here.
        """
        shared_sizes = self.group_by_size(files)
        return [f for f in files if f.size in shared_sizes]

    @staticmethod
    def build_duplicate_groups(
            digest_map: Mapping[str, Sequence[str]],
            sizes: Mapping[str, int]
    ) -> List[DuplicateGroup]:
        """
        Turns digest buckets into DuplicateGroups sorted by wasted space (descending).

        Args:
            digest_map: digest -> paths with that content
            sizes: path -> size in bytes, as recorded at scan time
        Returns:
            Groups with 2+ members. The sort is stable, so ties keep digest_map order.
        """
        groups = []
        for digest, paths in digest_map.items():
            if len(paths) < 2:
                continue
            members = sorted(paths, key=lambda p: (p.count(os.sep), p))
            size = sizes.get(members[0], 0)
            groups.append(DuplicateGroup(digest=digest, size=size, files=tuple(members)))

        groups.sort(key=lambda g: g.wasted_space, reverse=True)
        logger.debug(f"Built {len(groups)} duplicate groups from {len(digest_map)} digests")
        return groups

    @staticmethod
    def _group_by(files: List[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileRecord
        Returns:
            Dict[key, List[FileRecord]] with groups of fewer than 2 files removed
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
