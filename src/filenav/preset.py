"""Named skip presets: per-project file and directory patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from filenav.filter import PatternFilter, SkipPredicate, any_of


@dataclass(frozen=True, slots=True)
class Preset:
    """File and directory skip patterns for one kind of project.

    Attributes:
        files: fnmatch patterns for file names that are skipped.
        dirs: fnmatch patterns for directory names that are pruned.
        ignore_case: Match both lists case-insensitively.
    """

    files: tuple[str, ...] = ()
    dirs: tuple[str, ...] = ()
    ignore_case: bool = False

    def file_skip(self) -> SkipPredicate | None:
        if not self.files:
            return None
        return PatternFilter(self.files, ignore_case=self.ignore_case)

    def dir_skip(self) -> SkipPredicate | None:
        if not self.dirs:
            return None
        return PatternFilter(self.dirs, ignore_case=self.ignore_case)


BASE_PRESET: Final[str] = "generic"

PRESETS: Final[dict[str, Preset]] = {
    BASE_PRESET: Preset(
        files=(".DS_Store", "Thumbs.db"),
        dirs=(".git", ".hg", ".svn"),
    ),
    "python": Preset(
        files=("*.pyc", "*.pyo"),
        dirs=("__pycache__", ".venv", ".tox", ".pytest_cache", "*.egg-info"),
    ),
    # Test, mock and package files are skipped whatever their case.
    "node": Preset(
        files=("*test*.js", "*mock*.js", "*package*.json"),
        dirs=("node_modules", "__tests__", "__mocks__"),
        ignore_case=True,
    ),
    "rust": Preset(dirs=("target",)),
}


def preset_filters(name: str) -> tuple[SkipPredicate, SkipPredicate]:
    """Return the ``(file_skip, dir_skip)`` predicates of a named preset.

    The ``generic`` preset is combined with every other preset.

    Args:
        name: Preset name.

    Returns:
        tuple[SkipPredicate, SkipPredicate]: File skip and directory prune
        predicates.

    Raises:
        ValueError: If ``name`` is not a known preset.
    """
    if name not in PRESETS:
        known = ", ".join(sorted(PRESETS))
        raise ValueError(f"Unknown preset '{name}'. Known presets: {known}")

    chosen = [PRESETS[BASE_PRESET]]
    if name != BASE_PRESET:
        chosen.append(PRESETS[name])
    return (
        any_of(*(p.file_skip() for p in chosen)),
        any_of(*(p.dir_skip() for p in chosen)),
    )
