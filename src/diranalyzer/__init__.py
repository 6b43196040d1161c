"""
diranalyzer — directory inventory with size rollups, file type distribution and duplicate detection.

Core features:
- Per-directory cumulative size, direct file count and subdirectory count
- File type distribution and largest files/directories
- Exact duplicate detection: size buckets → parallel SHA-256 hashing → groups by wasted space
- JSON/CSV export, optional safe cleanup to system trash (via send2trash)
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("diranalyzer")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from diranalyzer.commands import AnalysisCommand
from diranalyzer.core import (
    AnalysisParams, AnalysisResults, FileRecord, DirectoryRecord, DuplicateGroup, ExportFormat,
    aggregate, find_duplicates)
from diranalyzer.utils.convert_utils import ConvertUtils
from diranalyzer.services import DuplicateService, ExportService, FileService, ReportService

__all__ = [
    "AnalysisCommand",
    "AnalysisParams",
    "AnalysisResults",
    "FileRecord",
    "DirectoryRecord",
    "DuplicateGroup",
    "ExportFormat",
    "aggregate",
    "find_duplicates",
    "ConvertUtils",
    "DuplicateService",
    "ExportService",
    "FileService",
    "ReportService",
    "__version__",
]
