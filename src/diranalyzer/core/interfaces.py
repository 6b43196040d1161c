"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the analysis engine.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (e.g., SHA-256, BLAKE2b).
- Hasher: Computes a content digest for a file on disk.
- DirectoryWalker: Walks a tree and returns files plus pre-seeded directory records.
- FileClassifier: Maps a file path to a category label.
- DuplicateFinder: Runs the size pre-filter, parallel hashing and grouping.
"""

from typing import Protocol, List, Optional, Callable, Tuple, Any

from diranalyzer.core.models import FileRecord, DuplicateGroup, DuplicateStats, ScanResult

ProgressCallback = Callable[[str, int, Optional[int]], None]


class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    Anything returning a hashlib-compatible object (update/hexdigest) can be plugged in.
    """
    name: str

    def new(self) -> Any:
        """Returns a fresh hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_digest(self, path: str) -> str: ...


class DirectoryWalker(Protocol):
    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> ScanResult:
        """
        Walk the configured root.

        Returns:
            ScanResult with the flat file list and one empty DirectoryRecord per visited directory.
        """
        ...


class FileClassifier(Protocol):
    def classify(self, path: str) -> str: ...


class DuplicateFinder(Protocol):
    def find_duplicates(
        self,
        files: List[FileRecord],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DuplicateStats]:
        ...
