"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/classifier.py
Extension-based file type classification used by the report.
"""
import os
from typing import Dict, Iterable

from diranalyzer.core.interfaces import FileClassifier

OTHER = "Other"

CATEGORIES: Dict[str, Iterable[str]] = {
    "Documents": ("pdf", "doc", "docx", "txt", "rtf", "odt", "pages"),
    "Images": ("jpg", "jpeg", "png", "gif", "bmp", "svg", "tiff", "webp", "ico"),
    "Videos": ("mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v"),
    "Audio": ("mp3", "wav", "flac", "aac", "ogg", "wma", "m4a"),
    "Archives": ("zip", "tar", "gz", "bz2", "xz", "7z", "rar"),
    "Code": ("rs", "py", "js", "ts", "html", "css", "cpp", "c", "h", "java", "go", "php"),
    "Executables": ("exe", "bin", "app", "deb", "rpm", "msi", "dmg"),
}


class FileTypeClassifier(FileClassifier):
    """Maps a path to a category by its (case-insensitive) last extension."""

    def __init__(self, categories: Dict[str, Iterable[str]] = None):
        self.type_map: Dict[str, str] = {}
        for category, extensions in (categories or CATEGORIES).items():
            for ext in extensions:
                self.type_map[ext.lower()] = category

    def classify(self, path: str) -> str:
        _, ext = os.path.splitext(os.path.basename(path))
        if not ext:
            return OTHER
        return self.type_map.get(ext[1:].lower(), OTHER)
