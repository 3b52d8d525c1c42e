"""Gitignore integration — skip entries matched by a root .gitignore via pathspec."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

from filenav.fs import PathMetadata

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


class GitignoreFilter:
    """Skip predicate backed by a compiled gitignore spec.

    Paths are matched relative to *root*; directories get a trailing
    ``/`` so that ``dir/`` patterns prune them. Paths outside *root* are
    never skipped.
    """

    def __init__(self, root: Path, spec: GitIgnoreSpec) -> None:
        self._root = Path(root)
        self._spec = spec

    @classmethod
    def from_root(cls, root: Path) -> GitignoreFilter | None:
        """Build a filter from ``root/.gitignore``, or ``None`` if absent."""
        spec = load_gitignore_spec(Path(root))
        return cls(root, spec) if spec is not None else None

    def __call__(self, path: Path, metadata: PathMetadata) -> bool:
        try:
            rel = path.relative_to(self._root).as_posix()
        except ValueError:
            return False
        if metadata.is_dir:
            rel += "/"
        return self._spec.match_file(rel)
