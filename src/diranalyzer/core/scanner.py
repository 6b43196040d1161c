"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Walks a directory tree and produces the flat entry lists consumed by the engine.
Features:
- Single os.walk pass with in-place pruning of excluded, hidden and too-deep directories
- Depth limit (root = 0), hidden-entry policy, regex exclude patterns
- Optional symlink following with cycle protection
- Per-entry errors are recorded and never abort the scan
"""

import os
import re
import stat
import time
import logging
from typing import List, Optional, Dict, Set, Tuple

logger = logging.getLogger(__name__)

# Local imports
from diranalyzer.core.models import (
    FileRecord, DirectoryRecord, ScanResult, ScanError, ErrorType, DEFAULT_MAX_DEPTH)
from diranalyzer.core.interfaces import DirectoryWalker, ProgressCallback

SCAN_STAGE = "Scanning"


class DirectoryWalkerImpl(DirectoryWalker):
    """
    Scans a directory recursively and returns FileRecords plus one empty
    DirectoryRecord per visited directory.

    Attributes:
        root_dir: Root directory to scan (made absolute)
        max_depth: Deepest entry level recorded; the root is level 0
        follow_symlinks: Enter symlinked directories and record symlinked files
        show_hidden: Include entries whose name starts with '.'
        exclude_patterns: Regular expressions searched against full paths
    """

    def __init__(
        self,
        root_dir: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        follow_symlinks: bool = False,
        show_hidden: bool = False,
        exclude_patterns: Optional[List[str]] = None
    ):
        if max_depth < 0:
            raise ValueError("Maximum depth cannot be negative")
        self.root_dir = os.path.abspath(root_dir)
        self.max_depth = max_depth
        self.follow_symlinks = follow_symlinks
        self.show_hidden = show_hidden
        self.exclude_patterns = []
        for pattern in exclude_patterns or []:
            try:
                self.exclude_patterns.append(re.compile(pattern))
            except re.error as e:
                raise ValueError(f"Failed to compile exclude pattern '{pattern}': {e}") from e
        self.progress_interval = 1000

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> ScanResult:
        """
        Single-pass walk. Returns a ScanResult; unreadable entries end up in result.errors.
        """
        logger.debug(f"Starting scan of {self.root_dir}")
        logger.debug(
            f"Options: max_depth={self.max_depth}, follow_symlinks={self.follow_symlinks}, "
            f"show_hidden={self.show_hidden}, exclude={[p.pattern for p in self.exclude_patterns]}"
        )

        if not os.path.exists(self.root_dir):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        result = ScanResult(root=self.root_dir)
        result.directories[self.root_dir] = DirectoryRecord(path=self.root_dir, depth=0)
        depths: Dict[str, int] = {self.root_dir: 0}
        visited: Set[Tuple[int, int]] = set()
        if self.follow_symlinks:
            root_stat = os.stat(self.root_dir)
            visited.add((root_stat.st_dev, root_stat.st_ino))

        def on_error(error: OSError) -> None:
            path = error.filename or self.root_dir
            logger.debug(f"Cannot read directory {path}: {error}")
            result.errors.append(ScanError(str(path), str(error), ErrorType.from_exception(error)))

        start_time = time.time()
        progress_counter = 0

        for dirpath, dirnames, filenames in os.walk(
                self.root_dir, topdown=True, onerror=on_error, followlinks=self.follow_symlinks):
            depth = depths.get(dirpath, 0)
            if depth >= self.max_depth:
                dirnames[:] = []
                continue

            kept = []
            for name in dirnames:
                path = os.path.join(dirpath, name)
                if not self._accept_directory(name, path, visited, result):
                    continue
                result.directories[path] = DirectoryRecord(path=path, depth=depth + 1)
                depths[path] = depth + 1
                # Directories at the depth limit are recorded but not entered
                if depth + 1 < self.max_depth:
                    kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                path = os.path.join(dirpath, name)
                if self._is_filtered(name, path):
                    continue
                record = self._process_file(path, depth + 1, result)
                if record:
                    result.files.append(record)
                    progress_counter += 1
                    if progress_callback and progress_counter >= self.progress_interval:
                        progress_callback(SCAN_STAGE, len(result.files), None)
                        progress_counter = 0

        if progress_callback and progress_counter > 0:
            progress_callback(SCAN_STAGE, len(result.files), None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(
            f"Scan completed: {result.total_files} files, {result.total_directories} directories, "
            f"{len(result.errors)} errors"
        )
        return result

    def _is_filtered(self, name: str, path: str) -> bool:
        """True if the entry is hidden (and hidden entries are off) or matches an exclude pattern."""
        if not self.show_hidden and name.startswith('.'):
            logger.debug(f"Skipping hidden entry: {path}")
            return True
        for pattern in self.exclude_patterns:
            if pattern.search(path):
                logger.debug(f"Skipping excluded entry: {path}")
                return True
        return False

    def _accept_directory(self, name: str, path: str, visited: Set[Tuple[int, int]], result: ScanResult) -> bool:
        """Pre-filter directories BEFORE os.walk enters them."""
        if self._is_filtered(name, path):
            return False

        if os.path.islink(path) and not self.follow_symlinks:
            logger.debug(f"Skipping symlinked directory: {path}")
            return False

        if self.follow_symlinks:
            try:
                st = os.stat(path)
            except OSError as e:
                result.errors.append(ScanError(path, str(e), ErrorType.from_exception(e)))
                return False
            key = (st.st_dev, st.st_ino)
            if key in visited:
                logger.debug(f"Skipping already visited directory (symlink loop?): {path}")
                return False
            visited.add(key)

        return True

    def _process_file(self, path: str, depth: int, result: ScanResult) -> Optional[FileRecord]:
        """
        Build a FileRecord from metadata, or record the error and return None.
        """
        try:
            is_symlink = os.path.islink(path)
            if is_symlink and not self.follow_symlinks:
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            st = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            result.errors.append(ScanError(path, str(e), ErrorType.from_exception(e)))
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return None

        return FileRecord(
            path=path,
            size=st.st_size,
            modified=st.st_mtime,
            is_symlink=is_symlink,
            depth=depth
        )
