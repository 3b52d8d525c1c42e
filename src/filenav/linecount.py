"""Line counting over a traversal: the callback used by the ``filenav`` command."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from filenav.filter import SkipPredicate
from filenav.fs import PathMetadata
from filenav.walker import WalkReport, traverse

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1 << 16


def count_lines(path: Path) -> int:
    """Count lines in *path* the way ``grep -c ^`` does.

    A final line without a trailing newline still counts.

    Args:
        path: File to read.

    Returns:
        int: Number of lines.

    Raises:
        OSError: If the file cannot be read.
    """
    count = 0
    last = b""
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            count += chunk.count(b"\n")
            last = chunk[-1:]
    if last and last != b"\n":
        count += 1
    return count


@dataclass(slots=True)
class LineCounter:
    """Async traversal callback accumulating per-file line counts.

    Attributes:
        files: Files counted so far.
        lines: Running line total.
        per_file: Line count per file path.
        failures: Files that could not be read.
    """

    files: int = 0
    lines: int = 0
    per_file: dict[Path, int] = field(default_factory=dict)
    failures: list[Path] = field(default_factory=list)

    async def __call__(self, path: Path, metadata: PathMetadata) -> None:
        try:
            n = await asyncio.to_thread(count_lines, path)
        except OSError as exc:
            logger.error("Error counting lines in %s: %s", path, exc)
            self.failures.append(path)
            return
        self.files += 1
        self.lines += n
        self.per_file[path] = n
        logger.debug("%s %d %d", path, self.files, self.lines)


@dataclass(frozen=True, slots=True)
class CountOptions:
    """Options for a line-counting walk.

    Attributes:
        root: Directory to walk.
        recursive: Descend into sub-directories.
        file_skip: Skip predicate for files.
        dir_skip: Prune predicate for directories.
        max_concurrency: Bound on in-flight filesystem calls.
    """

    root: Path
    recursive: bool = False
    file_skip: SkipPredicate | None = None
    dir_skip: SkipPredicate | None = None
    max_concurrency: int | None = None


async def count_tree(options: CountOptions) -> tuple[LineCounter, WalkReport]:
    """Count lines of every file reached by a traversal.

    Args:
        options: Walk options.

    Returns:
        tuple[LineCounter, WalkReport]: Accumulated counts and walk report.

    Raises:
        DirectoryListError: If the root directory cannot be listed.
    """
    counter = LineCounter()
    report = await traverse(
        options.root,
        counter,
        file_skip=options.file_skip,
        dir_skip=options.dir_skip,
        recursive=options.recursive,
        max_concurrency=options.max_concurrency,
    )
    logger.info(
        "Counted %d lines in %d files under %s", counter.lines, counter.files, options.root
    )
    return counter, report
