"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/export_service.py
Writes AnalysisResults to disk as JSON or CSV.
"""
import csv
import dataclasses
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from diranalyzer.core.models import AnalysisResults, ExportFormat

logger = logging.getLogger(__name__)

# File names that are not valid UTF-8 reach us as surrogate escapes
ENCODING_ERRORS = "backslashreplace"

CSV_HEADER = ["Type", "Path", "Size", "FileType", "Modified", "Depth"]


class ExportService:

    @staticmethod
    def export_results(
            results: AnalysisResults,
            fmt: ExportFormat,
            output_path: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Export results in the given format.

        Returns:
            Path of the written file

        Raises:
            RuntimeError: if the file cannot be written
        """
        path = ExportService.generate_output_path(fmt, output_path)
        try:
            if fmt == ExportFormat.JSON:
                ExportService._export_json(results, path)
            else:
                ExportService._export_csv(results, path)
        except (OSError, UnicodeError) as e:
            raise RuntimeError(f"Failed to write {fmt.display_name} report to {path}: {e}") from e

        logger.info(f"{fmt.display_name} report exported to {path}")
        return path

    @staticmethod
    def generate_output_path(fmt: ExportFormat, output_path: Optional[Union[str, Path]] = None) -> Path:
        if output_path:
            return Path(output_path)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        return Path(f"diranalyzer_report_{timestamp}.{fmt.value}")

    @staticmethod
    def to_dict(results: AnalysisResults) -> Dict[str, Any]:
        """JSON-ready representation of the results."""
        data = dataclasses.asdict(results)
        data["scan_info"]["timestamp"] = results.scan_info.timestamp.isoformat()
        for info in data["largest_files"]:
            info["modified"] = ExportService._format_timestamp(info["modified"])
        for stats in data["file_type_distribution"].values():
            if stats["largest_file"]:
                stats["largest_file"]["modified"] = ExportService._format_timestamp(
                    stats["largest_file"]["modified"])
        if results.duplicate_groups is not None:
            data["duplicate_groups"] = [g.to_dict() for g in results.duplicate_groups]
        return data

    @staticmethod
    def _format_timestamp(timestamp: Optional[float]) -> Optional[str]:
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()

    @staticmethod
    def _export_json(results: AnalysisResults, path: Path) -> None:
        with open(path, "w", encoding="utf-8", errors=ENCODING_ERRORS) as f:
            json.dump(ExportService.to_dict(results), f, indent=2, ensure_ascii=False)

    @staticmethod
    def _export_csv(results: AnalysisResults, path: Path) -> None:
        with open(path, "w", newline="", encoding="utf-8", errors=ENCODING_ERRORS) as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)

            for file in results.largest_files:
                writer.writerow([
                    "File",
                    file.path,
                    file.size,
                    file.file_type,
                    ExportService._format_timestamp(file.modified) or "",
                    "",
                ])

            for directory in results.largest_directories:
                writer.writerow(["Directory", directory.path, directory.size, "Directory", "", ""])

            for group in results.duplicate_groups or []:
                for file_path in group.files:
                    writer.writerow(["Duplicate", file_path, group.size, "Duplicate", "", ""])
