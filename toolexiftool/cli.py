#!/usr/bin/env python3
"""
toolexiftool - graphical viewer for exiftool metadata
-----------------------------------------------------
Shows, filters and compares the tags exiftool reports for one or more files
or folders, with a side-by-side diff view and clipboard export.
"""

import argparse
import json
import logging
import sys
import textwrap
from typing import List, Optional

import colorama
from colorama import Fore, Style

from .config.constants import DEFAULT_LOG_FILE, OUTPUT_FORMATS, VERSION
from .config.settings import Settings
from .core.exceptions import ToolExiftoolError, format_error_for_cli, format_error_for_json
from .core.exiftool import extract_binary
from .core.processor import normalize_paths, read_paths
from .reporters import get_reporter

logger = logging.getLogger(__name__)


def configure_logging(log_file: Optional[str], verbose: bool = False) -> None:
    """Configure logging system with appropriate levels and handlers."""
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    class ColoredFormatter(logging.Formatter):
        FORMATS = {
            logging.DEBUG: Fore.CYAN + "%(message)s" + Style.RESET_ALL,
            logging.INFO: "%(message)s",
            logging.WARNING: Fore.YELLOW + "%(message)s" + Style.RESET_ALL,
            logging.ERROR: Fore.RED + "%(message)s" + Style.RESET_ALL,
            logging.CRITICAL: Fore.RED + Style.BRIGHT + "%(message)s" + Style.RESET_ALL
        }

        def format(self, record):
            log_fmt = self.FORMATS.get(record.levelno)
            return logging.Formatter(log_fmt).format(record)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates on reconfiguration
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(ColoredFormatter())
        root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolexiftool",
        description=f"toolexiftool v{VERSION} - view, filter and compare exiftool metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
        Examples:
          toolexiftool photo.jpg
          toolexiftool original.jpg edited.jpg
          toolexiftool ~/Pictures/trip
          toolexiftool --print --format json photo.jpg
          toolexiftool --compare --diff-only a.jpg b.jpg

        Requires exiftool (https://exiftool.org/) on PATH, or set with --exiftool.
        ''')
    )

    parser.add_argument('paths', nargs='+', help='Files and/or folders to read')

    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--log-file', default=DEFAULT_LOG_FILE,
                        help='Log file path (empty string disables the log file)')
    parser.add_argument('--version', action='version', version=f'toolexiftool v{VERSION}')
    parser.add_argument('--exiftool', help='Path to the exiftool executable')

    recursion = parser.add_mutually_exclusive_group()
    recursion.add_argument('--recursive', '-r', dest='recursive', action='store_true',
                           help='Read folders recursively without asking')
    recursion.add_argument('--no-recursive', dest='recursive', action='store_false',
                           help='Read only the top level of folders without asking')
    parser.set_defaults(recursive=None)

    report = parser.add_argument_group('headless output')
    report.add_argument('--print', dest='print_report', action='store_true',
                        help='Print tags instead of opening the viewer')
    report.add_argument('--compare', action='store_true',
                        help='Print a side-by-side comparison of all files')
    report.add_argument('--diff-only', action='store_true',
                        help='With --compare, only list tags that differ')
    report.add_argument('--format', choices=OUTPUT_FORMATS, default='text',
                        help='Output format (default: text)')
    report.add_argument('--output', '-o', help='Output file (default: stdout)')
    report.add_argument('--filter', default='',
                        help='Only list matching tags; use <<Family>> to match a tag family')
    report.add_argument('--short', action='store_true', help='Use short tag names')
    report.add_argument('--numerical', action='store_true', help='Prefer numerical tag values')
    return parser


def run_report(paths: List[str], args: argparse.Namespace, options: dict) -> int:
    """Read `paths` and print a report instead of opening the viewer."""
    compare = args.compare or args.diff_only
    color = args.format == 'text' and not args.output and sys.stdout.isatty()
    reporter = get_reporter(args.format, **({'color': color} if args.format == 'text' else {}))
    if reporter is None:
        logger.error(f"Unsupported output format: {args.format}")
        return 1

    files = read_paths(paths, {**options, 'recursive': bool(args.recursive)})
    if compare and len(files) < 2:
        logger.warning("Only one file was read; the comparison has a single column")

    report_options = {
        'filter': args.filter,
        'short': args.short,
        'numerical': args.numerical,
        'only_diff': args.diff_only,
    }
    reporter.write_report(files, args.output, report_options, compare=compare)
    return 0


def run_viewer(paths: List[str], args: argparse.Namespace, options: dict, settings: Settings) -> int:
    """Open the graphical viewer."""
    from .ui import gui

    def reader(read, recursive):
        return read_paths(read, {**options, 'recursive': recursive})

    def binary_reader(file_path, entry):
        return extract_binary(file_path, entry, settings.exiftool)

    gui.launch(paths, recursive=args.recursive, reader=reader, binary_reader=binary_reader,
               download_dir=settings.download_dir)
    return 0


def is_headless(args: argparse.Namespace) -> bool:
    return bool(args.print_report or args.compare or args.diff_only)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the toolexiftool CLI."""
    colorama.init()
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_file, args.verbose and not args.quiet)

    try:
        settings = Settings.load(args.exiftool)
        paths = normalize_paths(args.paths)
        options = {
            'exiftool': settings.exiftool,
            'max_workers': settings.max_workers,
            'show_progress': not args.quiet,
        }
        if is_headless(args):
            return run_report(paths, args, options)
        return run_viewer(paths, args, options, settings)
    except ToolExiftoolError as e:
        logger.error(e.get_full_message())
        if is_headless(args) and args.format == 'json':
            # JSON consumers read the error from stdout
            print(json.dumps({'error': format_error_for_json(e)}, indent=2, ensure_ascii=False))
        else:
            print(f"{Fore.RED}{format_error_for_cli(e, args.verbose)}{Style.RESET_ALL}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
