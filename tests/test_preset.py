"""Tests for filenav.preset."""

from __future__ import annotations

from pathlib import Path

import pytest

from filenav.fs import PathMetadata
from filenav.preset import BASE_PRESET, PRESETS, Preset, preset_filters


def _file(name: str) -> tuple[Path, PathMetadata]:
    path = Path("project") / name
    return path, PathMetadata(path=path, is_file=True, is_dir=False)


def _dir(name: str) -> tuple[Path, PathMetadata]:
    path = Path("project") / name
    return path, PathMetadata(path=path, is_file=False, is_dir=True)


class TestPresetFilters:
    @pytest.mark.parametrize(
        ("name", "skipped_file", "pruned_dir"),
        [
            ("python", "mod.pyc", "__pycache__"),
            ("node", "app.test.js", "node_modules"),
            ("rust", ".DS_Store", "target"),
            ("generic", "Thumbs.db", ".git"),
        ],
    )
    def test_known_presets(self, name: str, skipped_file: str, pruned_dir: str) -> None:
        file_skip, dir_skip = preset_filters(name)
        assert file_skip(*_file(skipped_file)) is True
        assert dir_skip(*_dir(pruned_dir)) is True
        assert file_skip(*_file("main.c")) is False
        assert dir_skip(*_dir("src")) is False

    def test_base_preset_always_applied(self) -> None:
        file_skip, dir_skip = preset_filters("python")
        assert dir_skip(*_dir(".git")) is True
        assert file_skip(*_file(".DS_Store")) is True

    def test_file_patterns_do_not_prune_directories(self) -> None:
        file_skip, dir_skip = preset_filters("node")
        assert file_skip(*_file("contest.js")) is True
        assert dir_skip(*_dir("contest.js")) is False
        assert dir_skip(*_dir("latest")) is False

    def test_directory_patterns_do_not_skip_files(self) -> None:
        file_skip, _ = preset_filters("rust")
        assert file_skip(*_file("target")) is False

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("App.Test.js", True),
            ("Foo.MOCK.js", True),
            ("PACKAGE-lock.JSON", True),
            ("app.js", False),
        ],
    )
    def test_node_files_match_any_case(self, name: str, expected: bool) -> None:
        file_skip, _ = preset_filters("node")
        assert file_skip(*_file(name)) is expected

    def test_node_directories_match_any_case(self) -> None:
        _, dir_skip = preset_filters("node")
        assert dir_skip(*_dir("Node_Modules")) is True

    def test_python_preset_is_case_sensitive(self) -> None:
        file_skip, _ = preset_filters("python")
        assert file_skip(*_file("MOD.PYC")) is False

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown preset 'java'"):
            preset_filters("java")


class TestPreset:
    def test_empty_lists_give_no_predicate(self) -> None:
        preset = Preset(dirs=("target",))
        assert preset.file_skip() is None
        assert preset.dir_skip() is not None

    def test_registry_contains_base(self) -> None:
        assert BASE_PRESET in PRESETS
        assert all(isinstance(p, Preset) for p in PRESETS.values())
