"""
Console report rendering for AnalysisResults.
Returns plain text; printing is left to the caller.
"""
from typing import List

from diranalyzer.core.models import AnalysisResults
from diranalyzer.utils.convert_utils import ConvertUtils

MAX_GROUP_MEMBERS_SHOWN = 3


class ReportService:

    @staticmethod
    def render(results: AnalysisResults, top_count: int, duration: float, quiet: bool = False) -> str:
        if quiet:
            return ReportService.summary_line(results)

        lines: List[str] = []
        ReportService._header(lines, results, duration)
        ReportService._size_breakdown(lines, results)
        ReportService._type_distribution(lines, results, top_count)
        ReportService._largest_files(lines, results, top_count)
        ReportService._largest_directories(lines, results, top_count)
        if results.duplicate_groups is not None:
            ReportService._duplicates(lines, results, top_count)
        ReportService._performance(lines, results)
        lines.append("")
        lines.append("=" * 50)
        lines.append("Analysis complete! 🎉")
        lines.append("Use --export to save results to file.")
        return "\n".join(lines)

    @staticmethod
    def summary_line(results: AnalysisResults) -> str:
        info = results.scan_info
        return (f"Summary: {info.total_files} files, {info.total_directories} directories, "
                f"{ConvertUtils.bytes_to_human(info.total_size)} total")

    @staticmethod
    def _header(lines: List[str], results: AnalysisResults, duration: float) -> None:
        info = results.scan_info
        lines.append("")
        lines.append("📋 ANALYSIS REPORT")
        lines.append("=" * 50)
        lines.append("")
        lines.append("📁 Scan Information")
        lines.append(f"  Path: {info.path}")
        lines.append(f"  Timestamp: {info.timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}")
        lines.append(f"  Duration: {ConvertUtils.format_duration(duration)}")
        lines.append(f"  Depth Limit: {info.depth_limit}")
        if info.error_count:
            lines.append(f"  Unreadable Entries: {info.error_count}")
        lines.append("")
        lines.append("📊 Overview")
        lines.append(f"  Total Files: {info.total_files}")
        lines.append(f"  Total Directories: {info.total_directories}")
        lines.append(f"  Total Size: {ConvertUtils.bytes_to_human(info.total_size)}")
        if results.duplicate_groups is not None:
            lines.append(f"  Duplicate Files: {results.statistics.duplicate_files}")
            lines.append(f"  Wasted Space: {ConvertUtils.bytes_to_human(results.statistics.wasted_space)}")

    @staticmethod
    def _size_breakdown(lines: List[str], results: AnalysisResults) -> None:
        b = results.size_breakdown
        lines.append("")
        lines.append("📏 Size Breakdown")
        lines.append(f"  Small files (<1MB): {b.small_files_count} files, "
                     f"{ConvertUtils.bytes_to_human(b.small_files_size)}")
        lines.append(f"  Medium files (1MB-100MB): {b.medium_files_count} files, "
                     f"{ConvertUtils.bytes_to_human(b.medium_files_size)}")
        lines.append(f"  Large files (>100MB): {b.large_files_count} files, "
                     f"{ConvertUtils.bytes_to_human(b.large_files_size)}")

    @staticmethod
    def _type_distribution(lines: List[str], results: AnalysisResults, top_count: int) -> None:
        lines.append("")
        lines.append("📄 File Type Distribution")
        total_size = results.scan_info.total_size
        types = sorted(results.file_type_distribution.items(), key=lambda item: item[1].total_size, reverse=True)
        for i, (file_type, stats) in enumerate(types[:top_count], 1):
            percentage = ConvertUtils.calculate_percentage(stats.total_size, total_size)
            lines.append(f"  {i}. {file_type} files ({stats.count}) - "
                         f"{ConvertUtils.bytes_to_human(stats.total_size)} ({percentage:.1f}%)")
            if stats.largest_file:
                lines.append(f"     Largest: {stats.largest_file.path} "
                             f"({ConvertUtils.bytes_to_human(stats.largest_file.size)})")

    @staticmethod
    def _largest_files(lines: List[str], results: AnalysisResults, top_count: int) -> None:
        lines.append("")
        lines.append("🗂️  Largest Files")
        for i, file in enumerate(results.largest_files[:top_count], 1):
            lines.append(f"  {i}. {ConvertUtils.bytes_to_human(file.size)} - {file.path}")
            if file.modified is not None:
                lines.append(f"     Modified: {ConvertUtils.timestamp_to_human(file.modified)} | "
                             f"Type: {file.file_type}")

    @staticmethod
    def _largest_directories(lines: List[str], results: AnalysisResults, top_count: int) -> None:
        lines.append("")
        lines.append("📁 Largest Directories")
        for i, directory in enumerate(results.largest_directories[:top_count], 1):
            lines.append(f"  {i}. {ConvertUtils.bytes_to_human(directory.size)} - {directory.path}")
            lines.append(f"     {directory.file_count} files, {directory.subdirectory_count} subdirectories")

    @staticmethod
    def _duplicates(lines: List[str], results: AnalysisResults, top_count: int) -> None:
        groups = results.duplicate_groups
        lines.append("")
        lines.append("🔍 Duplicate File Analysis")
        if not groups:
            lines.append("  ✓ No duplicate files found!")
            return

        total_files = sum(g.duplicate_count for g in groups)
        total_wasted = sum(g.wasted_space for g in groups)
        lines.append(f"  Duplicate Groups: {len(groups)}")
        lines.append(f"  Total Duplicate Files: {total_files}")
        lines.append(f"  Total Wasted Space: {ConvertUtils.bytes_to_human(total_wasted)}")
        lines.append("")
        lines.append("  Top Duplicate Groups:")

        for i, group in enumerate(groups[:top_count], 1):
            lines.append(f"    {i}. {ConvertUtils.bytes_to_human(group.size)} ({group.duplicate_count} files) - "
                         f"{ConvertUtils.bytes_to_human(group.wasted_space)} wasted")
            shown = group.files[:MAX_GROUP_MEMBERS_SHOWN]
            for j, path in enumerate(shown):
                is_last = j == len(shown) - 1 and group.duplicate_count <= MAX_GROUP_MEMBERS_SHOWN
                lines.append(f"       {'└─' if is_last else '├─'} {path}")
            if group.duplicate_count > MAX_GROUP_MEMBERS_SHOWN:
                lines.append(f"       └─ ... and {group.duplicate_count - MAX_GROUP_MEMBERS_SHOWN} more files")

    @staticmethod
    def _performance(lines: List[str], results: AnalysisResults) -> None:
        stats = results.statistics
        lines.append("")
        lines.append("⚡ Performance Statistics")
        lines.append(f"  Scanning Speed: {stats.files_per_second:.0f} files/sec")
        lines.append(f"  Throughput: {ConvertUtils.bytes_to_human(stats.bytes_per_second)}/sec")
        if stats.duplicate_files > 0:
            lines.append(f"  Duplicate Detection: {stats.duplicate_files} files in groups")
            lines.append(f"  Space Efficiency: {stats.compression_ratio * 100:.1f}%")
