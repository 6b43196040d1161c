"""
Unified command orchestrator for directory analysis.
This is the SINGLE source of truth for the analysis workflow, used by the CLI and library callers.
"""
import logging
import time
from typing import Dict, List, Optional

from diranalyzer.core.aggregator import aggregate
from diranalyzer.core.analyzer import DirectoryAnalyzer
from diranalyzer.core.duplicates import DuplicateFinderImpl
from diranalyzer.core.interfaces import ProgressCallback
from diranalyzer.core.models import (
    AnalysisParams, AnalysisResults, DirectoryRecord, DuplicateGroup, DuplicateStats, ScanResult)
from diranalyzer.core.scanner import DirectoryWalkerImpl

logger = logging.getLogger(__name__)


class AnalysisCommand:
    """
    Orchestrates the entire analysis workflow:
    1. Walk the tree
    2. Aggregate directory totals
    3. Optionally find duplicates
    4. Build the report model

    Usage:
        params = AnalysisParams(root_dir="/data", find_duplicates=True)
        command = AnalysisCommand()
        results = command.execute(params, progress_callback=cli_progress_printer)
    """

    def __init__(self):
        self._scan: Optional[ScanResult] = None
        self._directories: Dict[str, DirectoryRecord] = {}
        self.duplicate_stats: Optional[DuplicateStats] = None

    def execute(
            self,
            params: AnalysisParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> AnalysisResults:
        """
        Execute the analysis with given parameters.

        Args:
            params: Validated analysis parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Raises:
            ValueError: If parameters are invalid
            RuntimeError: If the root directory cannot be scanned
        """
        start_time = time.time()

        walker = DirectoryWalkerImpl(
            root_dir=params.root_dir,
            max_depth=params.max_depth,
            follow_symlinks=params.follow_symlinks,
            show_hidden=params.show_hidden,
            exclude_patterns=params.exclude_patterns,
        )
        self._scan = walker.scan(progress_callback=progress_callback)
        if self._scan.errors:
            logger.info(f"{len(self._scan.errors)} entries could not be read during the scan")

        self._directories = aggregate(self._scan.files, self._scan.directories)

        duplicate_groups: Optional[List[DuplicateGroup]] = None
        if params.find_duplicates:
            finder = DuplicateFinderImpl(
                min_size=params.min_duplicate_size,
                thread_count=params.thread_count,
            )
            duplicate_groups, self.duplicate_stats = finder.find_duplicates(
                self._scan.files,
                progress_callback=progress_callback
            )

        analyzer = DirectoryAnalyzer(top_count=params.top_count)
        return analyzer.analyze(
            self._scan,
            self._directories,
            duplicate_groups=duplicate_groups,
            duration=time.time() - start_time,
            depth_limit=params.max_depth,
        )

    def get_scan(self) -> Optional[ScanResult]:
        """Walker output of the last execution."""
        return self._scan

    def get_directories(self) -> Dict[str, DirectoryRecord]:
        """Aggregated directory records of the last execution."""
        return dict(self._directories)
