"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for directory scanning, aggregation and duplicate detection.
"""

import os
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Optional, Tuple


# =============================
# Enums
# =============================

class ExportFormat(Enum):
    """Supported report export formats."""
    JSON = "json"
    CSV = "csv"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            ExportFormat.JSON: "JSON",
            ExportFormat.CSV: "CSV",
        }
        return mapping.get(self, self.value)

    def __str__(self) -> str:
        return self.value


class ErrorType(Enum):
    """Category of a recoverable per-entry scan error."""
    PERMISSION_DENIED = "permission_denied"
    FILE_NOT_FOUND = "file_not_found"
    IO_ERROR = "io_error"
    OTHER = "other"

    @classmethod
    def from_exception(cls, error: BaseException) -> "ErrorType":
        if isinstance(error, PermissionError):
            return cls.PERMISSION_DENIED
        if isinstance(error, FileNotFoundError):
            return cls.FILE_NOT_FOUND
        if isinstance(error, OSError):
            return cls.IO_ERROR
        return cls.OTHER


class Stage(str, Enum):
    SIZE = "Size grouping"
    HASH = "Content Hash"
    GROUP = "Grouping"

    @classmethod
    def get_all(cls):
        return [cls.SIZE, cls.HASH, cls.GROUP]


# ======================
#  Entry Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A single file discovered by the walker.
    Size is taken from metadata at scan time and is never re-read afterwards.
    """
    path: str
    size: int  # in bytes
    modified: Optional[float] = None  # unix timestamp
    is_symlink: bool = False
    depth: int = 0

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")
        if self.depth < 0:
            raise ValueError(f"File depth cannot be negative: {self.path}")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def parent(self) -> str:
        return os.path.dirname(self.path)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass
class DirectoryRecord:
    """
    Per-directory accumulator. Created empty by the walker, filled by aggregation.
    """
    path: str
    total_size: int = 0
    file_count: int = 0
    subdirectory_count: int = 0
    depth: int = 0

    def __repr__(self):
        return f"<DirectoryRecord path={self.path}, total_size={self.total_size}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    Files sharing the same content digest.
    All members have the same size by construction.
    """
    digest: str
    size: int
    files: Tuple[str, ...]

    def __post_init__(self):
        if len(self.files) < 2:
            raise ValueError("A duplicate group needs at least two files")
        # Accept any sequence from callers but store a tuple
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def wasted_space(self) -> int:
        """Bytes reclaimable by keeping only one member."""
        return self.size * (len(self.files) - 1)

    def to_dict(self) -> Dict:
        return {
            "hash": self.digest,
            "file_size": self.size,
            "files": list(self.files),
            "wasted_space": self.wasted_space,
        }

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class ScanError:
    """A recoverable error met while walking the tree."""
    path: str
    error: str
    error_type: ErrorType = ErrorType.OTHER


@dataclass
class ScanResult:
    """Output of the walker: flat file list plus pre-seeded directory map."""
    root: str
    files: List[FileRecord] = field(default_factory=list)
    directories: Dict[str, DirectoryRecord] = field(default_factory=dict)
    errors: List[ScanError] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_directories(self) -> int:
        return len(self.directories)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)


@dataclass
class DuplicateStats:
    """
    Statistics collected during duplicate detection.
    """
    candidates: int = 0
    size_bucket_survivors: int = 0
    hashed: int = 0
    failed: int = 0
    groups: int = 0
    total_time: float = 0.0
    stage_times: Dict[str, float] = field(default_factory=dict)

    def record_stage(self, stage_name: str, duration: float) -> None:
        self.stage_times[stage_name] = self.stage_times.get(stage_name, 0.0) + duration

    def print_summary(self) -> str:
        lines = [
            "📊 Duplicate Detection Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"Candidates: {self.candidates}",
            f"Same-size candidates: {self.size_bucket_survivors}",
            f"Hashed: {self.hashed} (failed: {self.failed})",
            f"Duplicate groups: {self.groups}",
        ]
        for stage, duration in self.stage_times.items():
            lines.append(f"{stage}: {duration:.3f}s")
        return "\n".join(lines)


# ======================
#  Analysis Results
# ======================

@dataclass
class FileInfo:
    path: str
    size: int
    file_type: str
    modified: Optional[float] = None


@dataclass
class DirectoryInfo:
    path: str
    size: int
    file_count: int
    subdirectory_count: int


@dataclass
class TypeStats:
    count: int = 0
    total_size: int = 0
    average_size: int = 0
    largest_file: Optional[FileInfo] = None

    def add(self, info: FileInfo) -> None:
        self.count += 1
        self.total_size += info.size
        self.average_size = self.total_size // self.count
        # Empty files never become the largest of their category
        if (self.largest_file.size if self.largest_file else 0) < info.size:
            self.largest_file = info


ONE_MB = 1024 * 1024
HUNDRED_MB = 100 * ONE_MB


@dataclass
class SizeBreakdown:
    small_files_count: int = 0   # < 1MB
    small_files_size: int = 0
    medium_files_count: int = 0  # 1MB - 100MB
    medium_files_size: int = 0
    large_files_count: int = 0   # >= 100MB
    large_files_size: int = 0

    @classmethod
    def from_files(cls, files: List[FileRecord]) -> "SizeBreakdown":
        breakdown = cls()
        for file in files:
            if file.size < ONE_MB:
                breakdown.small_files_count += 1
                breakdown.small_files_size += file.size
            elif file.size < HUNDRED_MB:
                breakdown.medium_files_count += 1
                breakdown.medium_files_size += file.size
            else:
                breakdown.large_files_count += 1
                breakdown.large_files_size += file.size
        return breakdown


@dataclass
class ScanInfo:
    path: str
    timestamp: datetime
    depth_limit: int
    total_files: int
    total_directories: int
    total_size: int
    scan_duration_ms: int
    error_count: int = 0


@dataclass
class Statistics:
    files_per_second: float = 0.0
    bytes_per_second: int = 0
    duplicate_files: int = 0
    wasted_space: int = 0
    compression_ratio: float = 1.0


@dataclass
class AnalysisResults:
    scan_info: ScanInfo
    size_breakdown: SizeBreakdown
    file_type_distribution: Dict[str, TypeStats]
    largest_files: List[FileInfo]
    largest_directories: List[DirectoryInfo]
    duplicate_groups: Optional[List[DuplicateGroup]]
    statistics: Statistics


"""
DTO for analysis parameters with built-in validation.
Interface-agnostic, used by the CLI and by library callers.
"""
from diranalyzer.utils.convert_utils import ConvertUtils

DEFAULT_MAX_DEPTH = 10
DEFAULT_MIN_DUPLICATE_SIZE = 1024
DEFAULT_TOP_COUNT = 20


@dataclass
class AnalysisParams:
    """Parameters for an analysis run with validation."""
    root_dir: str
    max_depth: int = DEFAULT_MAX_DEPTH
    find_duplicates: bool = False
    min_duplicate_size: int = DEFAULT_MIN_DUPLICATE_SIZE
    show_hidden: bool = False
    follow_symlinks: bool = False
    exclude_patterns: List[str] = field(default_factory=list)
    top_count: int = DEFAULT_TOP_COUNT
    thread_count: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.max_depth < 0:
            raise ValueError("Maximum depth cannot be negative")

        if self.min_duplicate_size < 0:
            raise ValueError("Minimum duplicate size cannot be negative")

        if self.top_count < 0:
            raise ValueError("Top count cannot be negative")

        if self.thread_count is not None and self.thread_count < 0:
            raise ValueError("Thread count cannot be negative")

        for pattern in self.exclude_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Failed to compile exclude pattern '{pattern}': {e}") from e

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = str(DEFAULT_MIN_DUPLICATE_SIZE),
            max_depth: int = DEFAULT_MAX_DEPTH,
            find_duplicates: bool = False,
            show_hidden: bool = False,
            follow_symlinks: bool = False,
            exclude_patterns: Optional[List[str]] = None,
            top_count: int = DEFAULT_TOP_COUNT,
            thread_count: Optional[int] = None,
    ) -> 'AnalysisParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return AnalysisParams(
            root_dir=root_dir,
            max_depth=max_depth,
            find_duplicates=find_duplicates,
            min_duplicate_size=ConvertUtils.human_to_bytes(min_size_str),
            show_hidden=show_hidden,
            follow_symlinks=follow_symlinks,
            exclude_patterns=list(exclude_patterns or []),
            top_count=top_count,
            thread_count=thread_count,
        )
