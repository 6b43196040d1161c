"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/analyzer.py
Summarizes an aggregated scan (and optional duplicate groups) into AnalysisResults.
"""
from datetime import datetime, timezone
from typing import List, Dict, Optional

from diranalyzer.core.classifier import FileTypeClassifier
from diranalyzer.core.interfaces import FileClassifier
from diranalyzer.core.models import (
    AnalysisResults, DirectoryInfo, DirectoryRecord, DuplicateGroup, FileInfo, ScanInfo,
    ScanResult, SizeBreakdown, Statistics, TypeStats, DEFAULT_MAX_DEPTH, DEFAULT_TOP_COUNT)


class DirectoryAnalyzer:
    """
    Builds the report model: type distribution, largest files and directories,
    size breakdown and throughput statistics.
    """

    def __init__(self, top_count: int = DEFAULT_TOP_COUNT, classifier: FileClassifier = None):
        self.top_count = top_count
        self.classifier = classifier or FileTypeClassifier()

    def analyze(
            self,
            scan: ScanResult,
            directories: Dict[str, DirectoryRecord],
            duplicate_groups: Optional[List[DuplicateGroup]] = None,
            duration: float = 0.0,
            depth_limit: int = DEFAULT_MAX_DEPTH
    ) -> AnalysisResults:
        """
        Args:
            scan: Walker output
            directories: Aggregated directory records (see core.aggregator.aggregate)
            duplicate_groups: None when duplicate detection was not requested
            duration: Wall time of the whole run in seconds
        """
        distribution: Dict[str, TypeStats] = {}
        largest_files: List[FileInfo] = []

        for file in scan.files:
            info = FileInfo(
                path=file.path,
                size=file.size,
                file_type=self.classifier.classify(file.path),
                modified=file.modified,
            )
            distribution.setdefault(info.file_type, TypeStats()).add(info)
            largest_files.append(info)

        largest_files.sort(key=lambda f: f.size, reverse=True)

        largest_directories = [
            DirectoryInfo(
                path=record.path,
                size=record.total_size,
                file_count=record.file_count,
                subdirectory_count=record.subdirectory_count,
            )
            for record in directories.values()
        ]
        largest_directories.sort(key=lambda d: d.size, reverse=True)

        total_size = scan.total_size
        scan_info = ScanInfo(
            path=scan.root,
            timestamp=datetime.now(timezone.utc),
            depth_limit=depth_limit,
            total_files=scan.total_files,
            total_directories=len(directories),
            total_size=total_size,
            scan_duration_ms=int(duration * 1000),
            error_count=len(scan.errors),
        )

        return AnalysisResults(
            scan_info=scan_info,
            size_breakdown=SizeBreakdown.from_files(scan.files),
            file_type_distribution=distribution,
            largest_files=largest_files[:self.top_count],
            largest_directories=largest_directories[:self.top_count],
            duplicate_groups=duplicate_groups,
            statistics=self.calculate_statistics(scan.total_files, total_size, duplicate_groups, duration),
        )

    @staticmethod
    def calculate_statistics(
            total_files: int,
            total_size: int,
            duplicate_groups: Optional[List[DuplicateGroup]],
            duration: float
    ) -> Statistics:
        stats = Statistics()
        if duration > 0:
            stats.files_per_second = total_files / duration
            stats.bytes_per_second = int(total_size / duration)

        if duplicate_groups:
            stats.duplicate_files = sum(g.duplicate_count for g in duplicate_groups)
            stats.wasted_space = sum(g.wasted_space for g in duplicate_groups)

        if total_size > 0:
            stats.compression_ratio = (total_size - stats.wasted_space) / total_size
        return stats
