"""
Core analysis engine — walker, aggregator, size pre-filter, parallel hasher and grouper.

This package contains the performance-critical foundation of diranalyzer:
- DirectoryWalkerImpl: single-pass directory traversal with depth/hidden/exclude/symlink policies
- aggregate: bottom-up directory size and count rollups without building a tree
- FileGrouperImpl: candidate filtering, exact-size buckets and digest groups
- ParallelHashStage + HasherImpl: SHA-256 content hashing on a bounded thread pool
- DuplicateFinderImpl: size → hash → group pipeline
- DirectoryAnalyzer: report model (type distribution, largest entries, statistics)

All components are pure Python with no UI dependencies.
"""

from .scanner import DirectoryWalkerImpl
from .aggregator import aggregate, AggregationStrategy
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl
from .digest_map import ConcurrentDigestMap
from .stages import SizeStageImpl, ParallelHashStage, HashProgress, resolve_thread_count
from .duplicates import DuplicateFinderImpl, find_duplicates
from .classifier import FileTypeClassifier
from .analyzer import DirectoryAnalyzer
from .models import (
    FileRecord, DirectoryRecord, DuplicateGroup, DuplicateStats, ScanResult, ScanError,
    ErrorType, ExportFormat, AnalysisParams, AnalysisResults)

__all__ = [
    "DirectoryWalkerImpl",
    "aggregate",
    "AggregationStrategy",
    "FileGrouperImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "ConcurrentDigestMap",
    "SizeStageImpl",
    "ParallelHashStage",
    "HashProgress",
    "resolve_thread_count",
    "DuplicateFinderImpl",
    "find_duplicates",
    "FileTypeClassifier",
    "DirectoryAnalyzer",
    "FileRecord",
    "DirectoryRecord",
    "DuplicateGroup",
    "DuplicateStats",
    "ScanResult",
    "ScanError",
    "ErrorType",
    "ExportFormat",
    "AnalysisParams",
    "AnalysisResults",
]
