"""CLI entry point for ignorescan — I/O boundary only."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ignorescan import IgnorescanError
from ignorescan.ignorefile import DEFAULT_IGNORE_FILE
from ignorescan.scanner import ScanOptions, scan_directory


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``ignorescan`` command.
    """
    parser = argparse.ArgumentParser(
        prog="ignorescan",
        description=(
            "List the files and directories not excluded by an ignore file "
            "such as .dockerignore"
        ),
    )
    parser.add_argument(
        "-d",
        "--basedir",
        default=".",
        dest="base_dir",
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "-i",
        "--ignorefile",
        default=DEFAULT_IGNORE_FILE,
        dest="ignore_file",
        help=f"Ignore file name, looked up in the base directory (default: {DEFAULT_IGNORE_FILE})",
    )
    parser.add_argument(
        "--legacy-comments",
        action="store_true",
        dest="legacy_comments",
        help="Treat only a bare '#' line as a comment",
    )
    return parser


def run_ignorescan(argv: list[str] | None = None) -> str:
    """Run ignorescan with provided CLI args and return formatted output.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Included paths, one per line.

    Raises:
        IgnorescanError: On any user-facing validation or I/O error.
    """
    args = build_parser().parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Resolve directory and validate it is a directory.

    Raises:
        IgnorescanError: If directory does not exist or is not a directory.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise IgnorescanError(f"'{directory}' is not a directory")
    return root


def _run_with_args(args: argparse.Namespace) -> str:
    root = _resolve_root(args.base_dir)
    options = ScanOptions(
        ignore_file=args.ignore_file,
        legacy_comments=args.legacy_comments,
    )
    return "\n".join(scan_directory(root, options))


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    args = build_parser().parse_args()

    try:
        output = _run_with_args(args)
    except IgnorescanError as exc:
        sys.stderr.write(f"ignorescan: {exc}\n")
        sys.exit(1)

    if output:
        sys.stdout.write(output + "\n")
