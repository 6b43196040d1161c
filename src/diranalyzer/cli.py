#!/usr/bin/env python3
"""
diranalyzer CLI — size breakdown, file type distribution and duplicate detection for a directory tree.
Optional cleanup moves duplicates to the system trash, never erases them.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from diranalyzer.aliases import (
    EXPORT_FORMAT_ALIASES, EXPORT_FORMAT_CHOICES, EXPORT_HELP_TEXT, EXCLUDE_HELP_TEXT, EPILOG_TEXT
)
from diranalyzer.commands import AnalysisCommand
from diranalyzer.core.models import (
    AnalysisParams, AnalysisResults, DuplicateGroup,
    DEFAULT_MAX_DEPTH, DEFAULT_MIN_DUPLICATE_SIZE, DEFAULT_TOP_COUNT)
from diranalyzer.services.duplicate_service import DuplicateService
from diranalyzer.services.export_service import ExportService
from diranalyzer.services.file_service import FileService
from diranalyzer.services.report_service import ReportService
from diranalyzer.utils.convert_utils import ConvertUtils


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Force UTF-8 on Windows consoles; undecodable file names are printed escaped
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8', errors='backslashreplace')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="diranalyzer",
            description="diranalyzer — directory size, file type and duplicate analysis",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "path",
            metavar="PATH",
            type=str,
            help="Path to the directory to analyze"
        )

        # Traversal options
        parser.add_argument(
            "--depth", "-d",
            dest="max_depth",
            default=DEFAULT_MAX_DEPTH,
            type=int,
            metavar='',
            help=f"Maximum depth for directory traversal. Default: {DEFAULT_MAX_DEPTH}"
        )
        parser.add_argument(
            "--all", "-a",
            dest="show_hidden",
            action="store_true",
            help="Include hidden files and directories in analysis"
        )
        parser.add_argument(
            "--exclude",
            dest="exclude_patterns",
            action="append",
            default=[],
            type=str,
            metavar='',
            help=EXCLUDE_HELP_TEXT
        )
        parser.add_argument(
            "--follow-links",
            dest="follow_links",
            action="store_true",
            help="Follow symbolic links during traversal"
        )

        # Duplicate detection options
        parser.add_argument(
            "--duplicates",
            action="store_true",
            help="Enable duplicate file detection using SHA-256 hashing"
        )
        parser.add_argument(
            "--min-size",
            default=str(DEFAULT_MIN_DUPLICATE_SIZE),
            type=str,
            metavar='',
            help=f"Minimum file size for duplicate detection (e.g., 500KB, 1MB). "
                 f"Default: {DEFAULT_MIN_DUPLICATE_SIZE}"
        )
        parser.add_argument(
            "--threads", "-t",
            default=None,
            type=int,
            metavar='',
            help="Number of threads for parallel hashing (default: auto-detect)"
        )

        # Output options
        parser.add_argument(
            "--top", "-n",
            dest="top_count",
            default=DEFAULT_TOP_COUNT,
            type=int,
            metavar='',
            help=f"Number of top items to display in size and type reports. Default: {DEFAULT_TOP_COUNT}"
        )
        parser.add_argument(
            "--export", "-e",
            choices=EXPORT_FORMAT_CHOICES,
            default=None,
            type=str,
            help=EXPORT_HELP_TEXT
        )
        parser.add_argument(
            "--output", "-o",
            default=None,
            type=str,
            metavar='',
            help="Output file path for export (default: auto-generated)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Quiet mode - show only essential information"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed progress and statistics"
        )

        # Actions
        parser.add_argument(
            "--keep-one",
            action="store_true",
            help="Keep one file per duplicate group and move the rest to trash. "
                 "Requires --duplicates. Always shows preview before deletion."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-one (for automation/scripts)"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before scanning starts."""
        if args.force and not args.keep_one:
            self.error_exit("--force can only be used with --keep-one")

        if args.keep_one and not args.duplicates:
            self.error_exit("--keep-one requires --duplicates")

        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep_one and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.path).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.path}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.path}")

        if not ConvertUtils.is_valid_size_format(args.min_size):
            self.error_exit(f"Invalid size format: {args.min_size}")

        if args.threads is not None and args.threads < 1:
            self.error_exit("Thread count must be at least 1")

        if args.output and not args.export:
            self.warning("--output has no effect without --export")

    def create_params(self, args: argparse.Namespace) -> AnalysisParams:
        """Create AnalysisParams from CLI arguments."""
        try:
            return AnalysisParams.from_human_readable(
                root_dir=str(Path(args.path).resolve()),
                min_size_str=args.min_size,
                max_depth=args.max_depth,
                find_duplicates=args.duplicates,
                show_hidden=args.show_hidden,
                follow_symlinks=args.follow_links,
                exclude_patterns=args.exclude_patterns,
                top_count=args.top_count,
                thread_count=args.threads,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def run_analysis(self, params: AnalysisParams) -> AnalysisResults:
        """Execute the analysis workflow."""
        command = AnalysisCommand()
        try:
            results = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except (RuntimeError, ValueError) as e:
            self.error_exit(f"Analysis failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            if command.duplicate_stats:
                print(command.duplicate_stats.print_summary())
        return results

    def export(self, results: AnalysisResults, fmt: str, output: Optional[str]) -> None:
        try:
            path = ExportService.export_results(results, EXPORT_FORMAT_ALIASES[fmt], output)
        except RuntimeError as e:
            self.error_exit(str(e))
        if not self.quiet:
            print(f"📄 {fmt.upper()} report exported to: {path}")

    def execute_keep_one(self, groups: List[DuplicateGroup], force: bool = False) -> None:
        """Keep one file per group, trash the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        files_to_delete, _ = DuplicateService.keep_only_one_file_per_group(groups)
        space_saved_str = ConvertUtils.bytes_to_human(
            DuplicateService.reclaimable_bytes(groups, files_to_delete))

        # Always show deletion preview before action
        print()
        for idx, group in enumerate(groups, 1):
            print(f"📁 Group {idx} | Size: {ConvertUtils.bytes_to_human(group.size)} | Files: {group.duplicate_count}")
            print("-" * 60)
            print(f"   [KEEP] {group.files[0]}")
            for path in group.files[1:]:
                print(f"   [DEL]  {path}")
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(groups)} files preserved, "
              f"{len(files_to_delete)} files deleted)")
        print(f"Total space saved: {space_saved_str}")
        print()

        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )
            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        print(f"\nMoving {len(files_to_delete)} files to trash...")
        deleted_count = 0
        failed_files = []

        for i, path in enumerate(files_to_delete, 1):
            if self.verbose:
                print(f"  [{i}/{len(files_to_delete)}] {os.path.basename(path)}")
            try:
                FileService.move_to_trash(path)
                deleted_count += 1
            except (OSError, RuntimeError) as e:
                failed_files.append((path, str(e)))
                self.warning(f"Failed to delete {path}: {e}")

        if failed_files:
            print(f"\n⚠️  Partial success: {deleted_count}/{len(files_to_delete)} files moved to trash.")
            print(f"Failed to delete {len(failed_files)} file(s):")
            for path, error in failed_files[:5]:
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(failed_files) > 5:
                print(f"  ...and {len(failed_files) - 5} more files")
        else:
            print(f"✅ Successfully moved {deleted_count} files to trash.")
            print(f"Total space saved: {space_saved_str}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("diranalyzer").setLevel(logging.INFO)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Analyzing directory: {params.root_dir}")

        results = self.run_analysis(params)
        elapsed = time.time() - self.start_time
        print(ReportService.render(results, params.top_count, elapsed, quiet=self.quiet))

        if args.export:
            self.export(results, args.export, args.output)

        if args.keep_one:
            self.execute_keep_one(results.duplicate_groups or [], force=args.force)

        if self.verbose:
            print(f"\n✅ Completed in {time.time() - self.start_time:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
