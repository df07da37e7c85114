#!/usr/bin/env python3
"""
dupfind CLI — Command line interface for duplicate file detection.
Read-only: reports duplicate groups and wasted space, never touches the files.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dupfind.commands import DeduplicationCommand
from dupfind.core.models import DeduplicationConfig, DeduplicationParams, DuplicateReport, InvalidRootError
from dupfind.utils.convert_utils import ConvertUtils

EPILOG_TEXT = """
Examples:
  dupfind --input ~/Downloads
  dupfind -i /data --min-size 1MB --excluded-dirs /data/cache --workers 4
  dupfind                      (prompts for a directory)
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupfind",
            description="dupfind — find byte-for-byte identical files and the space they waste",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            default=None,
            type=str,
            help="Directory to scan for duplicates (prompted for when omitted)"
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default=None,
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: no limit"
        )
        parser.add_argument(
            "--max-size", "-M",
            default=None,
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )
        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Performance options
        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='',
            help=f"Parallel hashing threads (suggested: {DeduplicationConfig.DEFAULT_MAX_WORKERS}). Default: 1"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Print only the summary line"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging, stage statistics and skipped files"
        )

        return parser.parse_args(args)

    @staticmethod
    def strip_quotes(path: str) -> str:
        """Removes one pair of matching surrounding quotes, as pasted from a file manager."""
        path = path.strip()
        if len(path) >= 2 and path[0] == path[-1] and path[0] in ('"', "'"):
            return path[1:-1]
        return path

    def read_input_dir(self, args: argparse.Namespace) -> str:
        """Directory from --input, or asked interactively."""
        if args.input is not None:
            raw = args.input
        else:
            try:
                raw = input("Enter directory path: ")
            except EOFError:
                raw = ""

        path = self.strip_quotes(raw)
        if not path:
            self.error_exit("No directory provided")
        return path

    def validate_args(self, args: argparse.Namespace, input_dir: str) -> None:
        """Validate command-line arguments before execution."""
        root_path = Path(input_dir)
        if not root_path.exists():
            self.error_exit(f"Directory does not exist: {input_dir}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {input_dir}")

        if args.workers < 1:
            self.error_exit("Number of workers must be at least 1")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace, input_dir: str) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            min_size_bytes = ConvertUtils.human_to_bytes(args.min_size) if args.min_size else None
            max_size_bytes = ConvertUtils.human_to_bytes(args.max_size) if args.max_size else None

            excluded_dirs = [str(Path(item.strip()).resolve()) for item in args.excluded_dirs]

            return DeduplicationParams(
                root_dir=input_dir,
                min_size_bytes=min_size_bytes,
                max_size_bytes=max_size_bytes,
                excluded_dirs=excluded_dirs,
                max_workers=args.workers
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_deduplication(self, params: DeduplicationParams) -> DuplicateReport:
        """Execute the scan."""
        command = DeduplicationCommand()
        try:
            report = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except InvalidRootError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print(f"Scanned {len(command.get_files())} files")
            print(report.stats.print_summary())
        return report

    def output_results(self, report: DuplicateReport) -> None:
        """Print duplicate groups and the wasted space."""
        total_str = ConvertUtils.bytes_to_human(report.total_wasted)
        if self.quiet:
            print(f"{len(report.groups)} duplicate groups, total wasted space: {total_str}")
            return

        print("\n========================================")
        print(f"Results: Found {len(report.groups)} duplicate groups")
        print("========================================\n")

        for idx, group in enumerate(report.groups, 1):
            print(f"Group {idx}: {len(group.files)} files, "
                  f"{ConvertUtils.bytes_to_human(group.size)} each, "
                  f"wasted: {ConvertUtils.bytes_to_human(group.wasted_space)}")
            for file in group.files:
                print(f"  - {file.path}")
            print()

        print("========================================")
        print(f"Total wasted space: {total_str}")
        print("========================================")

    def output_skipped(self, report: DuplicateReport) -> None:
        """Report files and directories left out of the results."""
        if not report.skipped:
            return
        if self.verbose:
            print(f"\nSkipped {len(report.skipped)} entries:")
            for entry in report.skipped:
                print(f"  [{entry.stage}] {entry.path}: {entry.reason}")
        else:
            self.warning(f"Skipped {len(report.skipped)} unreadable entries (use --verbose for details)")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet and not args.verbose

        if self.verbose:
            logging.getLogger("dupfind").setLevel(logging.DEBUG)

        input_dir = self.read_input_dir(args)
        self.validate_args(args, input_dir)
        params = self.create_params(args, input_dir)

        if not self.quiet:
            print("========================================")
            print("Duplicate File Finder")
            print("========================================")
            print(f"Scanning directory: {params.root_dir}")

        report = self.run_deduplication(params)
        self.output_results(report)
        self.output_skipped(report)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


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
