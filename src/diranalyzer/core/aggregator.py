"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/aggregator.py
Rolls a flat file list up into per-directory totals without building a tree.

For every directory in the map:
  • total_size: sum of all files nested anywhere beneath it
  • file_count: files whose immediate parent is this directory
  • subdirectory_count: directories whose immediate parent is this directory

A file or directory whose ancestors are missing from the map only contributes
to the ancestors that are present. This never raises.
"""

import dataclasses
import logging
import os
from enum import Enum
from typing import Dict, List, Optional

from diranalyzer.core.models import FileRecord, DirectoryRecord

logger = logging.getLogger(__name__)


class AggregationStrategy(Enum):
    ANCESTOR_CHAIN = "ancestor-chain"  # O(files × depth)
    BOTTOM_UP = "bottom-up"            # O(files + directories)


def _parent(path: str) -> Optional[str]:
    parent = os.path.dirname(path)
    if not parent or parent == path:
        return None
    return parent


def _component_count(path: str) -> int:
    return len([part for part in os.path.normpath(path).split(os.sep) if part])


def _nearest_present_ancestor(path: str, directories: Dict[str, DirectoryRecord]) -> Optional[str]:
    current = _parent(path)
    while current is not None and current not in directories:
        current = _parent(current)
    return current


def aggregate(
        files: List[FileRecord],
        directories: Dict[str, DirectoryRecord],
        strategy: AggregationStrategy = AggregationStrategy.BOTTOM_UP
) -> Dict[str, DirectoryRecord]:
    """
    Returns new DirectoryRecords with sizes and counts filled in.
    The input records are not modified.
    """
    result = {
        path: dataclasses.replace(record, total_size=0, file_count=0, subdirectory_count=0)
        for path, record in directories.items()
    }

    orphans = 0
    for file in files:
        parent = file.parent
        if parent in result:
            result[parent].file_count += 1
        else:
            orphans += 1

    if strategy == AggregationStrategy.ANCESTOR_CHAIN:
        _sum_ancestor_chain(files, result)
    else:
        _sum_bottom_up(files, result)

    for path in result:
        parent = _parent(path)
        if parent is not None and parent in result:
            result[parent].subdirectory_count += 1

    if orphans:
        logger.debug(f"{orphans} file(s) have a parent directory outside the scanned map")
    return result


def _sum_ancestor_chain(files: List[FileRecord], result: Dict[str, DirectoryRecord]) -> None:
    for file in files:
        current = _parent(file.path)
        while current is not None:
            record = result.get(current)
            if record is not None:
                record.total_size += file.size
            current = _parent(current)


def _sum_bottom_up(files: List[FileRecord], result: Dict[str, DirectoryRecord]) -> None:
    # Seed each directory with the files it owns, skipping gaps in the map
    for file in files:
        owner = _nearest_present_ancestor(file.path, result)
        if owner is not None:
            result[owner].total_size += file.size

    # Deepest first, so every directory is complete before it is added to its parent
    ordered = sorted(result, key=_component_count, reverse=True)
    for path in ordered:
        owner = _nearest_present_ancestor(path, result)
        if owner is not None:
            result[owner].total_size += result[path].total_size
