"""CLI entry point for filenav — I/O boundary only."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from filenav import ConfigError, FilenavError
from filenav.filter import PatternFilter, SkipPredicate, SuffixFilter, any_of
from filenav.gitignore import GitignoreFilter
from filenav.linecount import CountOptions, LineCounter, count_tree
from filenav.walker import WalkReport


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``filenav`` command.
    """
    parser = argparse.ArgumentParser(
        prog="filenav",
        description="count lines of files found by a filtered directory walk",
    )
    parser.add_argument("directory", help="Root directory to walk")
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Descend into sub-directories",
    )
    parser.add_argument(
        "-e",
        "--ext",
        action="append",
        default=[],
        dest="extensions",
        help="Only count files with this extension (can be specified multiple times)",
    )
    parser.add_argument(
        "-x",
        "--exclude-file",
        action="append",
        default=[],
        dest="file_patterns",
        help="Skip files whose name matches pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "-I",
        "--exclude-dir",
        action="append",
        default=[],
        dest="dir_patterns",
        help="Do not descend into directories matching pattern",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Apply skip preset (python, node, rust, generic)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries matched by the root directory's .gitignore",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        dest="max_concurrency",
        help="Maximum number of concurrent filesystem calls (default: unbounded)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output)",
    )
    return parser


def run_filenav(argv: list[str] | None = None) -> str:
    """Run filenav with provided CLI args and return formatted output.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Per-file line counts followed by a summary line.

    Raises:
        FilenavError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Resolve directory and validate it is a directory.

    Raises:
        ConfigError: If directory does not exist or is not a directory.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise ConfigError(f"'{directory}' is not a directory", root)
    return root


def _preset_filters(
    name: str | None,
) -> tuple[SkipPredicate | None, SkipPredicate | None]:
    if not name:
        return None, None

    from filenav.preset import preset_filters

    try:
        return preset_filters(name)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _build_options(args: argparse.Namespace) -> CountOptions:
    """Translate parsed arguments into walk options.

    Raises:
        ConfigError: On invalid option values.
    """
    root = _resolve_root(args.directory)
    if args.max_concurrency is not None and args.max_concurrency < 1:
        raise ConfigError("--jobs must be a positive integer")

    preset_file_skip, preset_dir_skip = _preset_filters(args.preset)
    ignored = GitignoreFilter.from_root(root) if args.gitignore else None

    file_skip = any_of(
        SuffixFilter(args.extensions) if args.extensions else None,
        PatternFilter(args.file_patterns) if args.file_patterns else None,
        preset_file_skip,
        ignored,
    )
    dir_skip = any_of(
        PatternFilter(args.dir_patterns) if args.dir_patterns else None,
        preset_dir_skip,
        ignored,
    )
    return CountOptions(
        root=root,
        recursive=args.recursive,
        file_skip=file_skip,
        dir_skip=dir_skip,
        max_concurrency=args.max_concurrency,
    )


def _format_output(root: Path, counter: LineCounter, report: WalkReport) -> str:
    lines = [
        f"{count}\t{path.relative_to(root).as_posix()}"
        for path, count in sorted(counter.per_file.items())
    ]
    summary = f"{counter.files} files, {counter.lines} lines"
    problems = len(report.errors) + len(counter.failures)
    if problems:
        summary += f", {problems} errors"
    lines.append(summary)
    return "\n".join(lines)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the walk/count pipeline for parsed arguments.

    Raises:
        FilenavError: On any user-facing validation or I/O error.
    """
    options = _build_options(args)
    counter, report = asyncio.run(count_tree(options))
    return _format_output(options.root, counter, report)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args.verbose)

    try:
        output = _run_with_args(args)
    except FilenavError as exc:
        sys.stderr.write(f"filenav: {exc}\n")
        sys.exit(1)

    sys.stdout.write(output + "\n")
