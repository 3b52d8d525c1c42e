"""Skip predicates: fnmatch, regex and suffix matching plus composition.

A skip predicate is any callable ``(path, metadata) -> bool`` where
``True`` means skip the file or prune the directory.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from fnmatch import fnmatch, fnmatchcase
from pathlib import Path

from filenav.fs import PathMetadata

SkipPredicate = Callable[[Path, PathMetadata], bool]


def never_skip(path: Path, metadata: PathMetadata) -> bool:
    """Default predicate that skips nothing."""
    return False


class PatternFilter:
    """Skip entries whose name matches any fnmatch pattern."""

    def __init__(
        self, patterns: Iterable[str] | None = None, ignore_case: bool = False
    ) -> None:
        """Initialize pattern filter.

        Args:
            patterns: Optional fnmatch pattern list.
            ignore_case: Match names case-insensitively on every platform.
        """
        self._patterns: list[str] = list(patterns) if patterns else []
        self._ignore_case = ignore_case
        if ignore_case:
            self._patterns = [pat.lower() for pat in self._patterns]

    def __call__(self, path: Path, metadata: PathMetadata) -> bool:
        """Return whether an entry should be skipped.

        Args:
            path: Entry path.
            metadata: Entry metadata.

        Returns:
            bool: ``True`` when any configured pattern matches the name.
        """
        if self._ignore_case:
            name = path.name.lower()
            return any(fnmatchcase(name, pat) for pat in self._patterns)
        return any(fnmatch(path.name, pat) for pat in self._patterns)

    def __repr__(self) -> str:
        return f"PatternFilter({self._patterns!r}, ignore_case={self._ignore_case!r})"


class RegexFilter:
    """Skip entries whose full path matches a regular expression."""

    def __init__(self, pattern: str | re.Pattern[str], flags: int = 0) -> None:
        self._regex = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def __call__(self, path: Path, metadata: PathMetadata) -> bool:
        return self._regex.search(path.as_posix()) is not None


class SuffixFilter:
    """Skip files whose suffix is not in an allow-list.

    Suffixes are compared case-insensitively and may be given with or
    without the leading dot.
    """

    def __init__(self, suffixes: Iterable[str]) -> None:
        self._suffixes = frozenset(
            (s if s.startswith(".") else f".{s}").lower() for s in suffixes
        )

    def __call__(self, path: Path, metadata: PathMetadata) -> bool:
        return path.suffix.lower() not in self._suffixes


def any_of(*predicates: SkipPredicate | None) -> SkipPredicate:
    """Combine predicates so that an entry is skipped if any member skips it.

    Args:
        *predicates: Predicates to combine. ``None`` members are dropped.

    Returns:
        SkipPredicate: The combined predicate, or :func:`never_skip` when
        nothing is left to combine.
    """
    active = [p for p in predicates if p is not None]
    if not active:
        return never_skip
    if len(active) == 1:
        return active[0]

    def combined(path: Path, metadata: PathMetadata) -> bool:
        return any(p(path, metadata) for p in active)

    return combined
