from .duplicate_service import DuplicateService
from .export_service import ExportService
from .file_service import FileService
from .report_service import ReportService

__all__ = ["DuplicateService", "ExportService", "FileService", "ReportService"]
