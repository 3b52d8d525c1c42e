"""Shared fixtures for filenav tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from filenav.fs import PathMetadata


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure::

        root/
        ├── docs/
        │   └── guide.md
        ├── src/
        │   ├── api/
        │   │   ├── auth.py
        │   │   └── user.py
        │   └── models/
        │       └── user.py
        ├── tests/
        │   └── test_user.py
        └── README.md
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide\n")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "api").mkdir()
    (tmp_path / "src" / "api" / "auth.py").write_text("import os\n\nauth = 1\n")
    (tmp_path / "src" / "api" / "user.py").write_text("user = 1\n")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "src" / "models" / "user.py").write_text("class User:\n    pass")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_user.py").write_text("def test():\n    pass\n")
    (tmp_path / "README.md").write_text("readme\n")
    return tmp_path


@pytest.fixture
def noisy_tree(tmp_path: Path) -> Path:
    """Tree with noise directories (node_modules, __tests__, etc.).

    Structure::

        root/
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.js
        │   ├── app.test.js
        │   └── __tests__/
        │       └── app.js
        ├── package.json
        └── README.md
    """
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("module.exports = 1;\n")
    (tmp_path / "src" / "__tests__").mkdir(parents=True)
    (tmp_path / "src" / "app.js").write_text("const a = 1;\nconst b = 2;\n")
    (tmp_path / "src" / "app.test.js").write_text("test();\n")
    (tmp_path / "src" / "__tests__" / "app.js").write_text("it();\n")
    (tmp_path / "package.json").write_text("{}\n")
    (tmp_path / "README.md").write_text("readme\n")
    return tmp_path


@pytest.fixture
def gitignore_tree(tmp_path: Path) -> Path:
    """Tree with .gitignore for gitignore-integration testing.

    Structure::

        root/
        ├── .gitignore          (*.pyc, node_modules/, dist/)
        ├── dist/
        │   └── bundle.js
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.py
        │   └── app.pyc
        └── README.md
    """
    (tmp_path / ".gitignore").write_text("*.pyc\nnode_modules/\ndist/\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("bundle")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("js")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("app")
    (tmp_path / "src" / "app.pyc").write_bytes(b"\x00")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


class FakeFileSystem:
    """In-memory filesystem recording every call the walker makes.

    ``tree`` maps POSIX path strings to a list of child names (directory),
    ``"file"``, or ``"other"`` (neither file nor directory). Paths listed in
    ``failing_lists`` / ``failing_stats`` raise ``PermissionError``.
    """

    def __init__(
        self,
        tree: dict[str, list[str] | str],
        failing_lists: set[str] | None = None,
        failing_stats: set[str] | None = None,
    ) -> None:
        self.tree = tree
        self.failing_lists = failing_lists or set()
        self.failing_stats = failing_stats or set()
        self.listed: list[str] = []
        self.stated: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def _enter(self) -> None:
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        await asyncio.sleep(0)
        self.in_flight -= 1

    async def list_directory(self, path: Path) -> list[str]:
        key = Path(path).as_posix()
        self.listed.append(key)
        await self._enter()
        if key in self.failing_lists:
            raise PermissionError(13, "Permission denied", key)
        children = self.tree.get(key)
        if not isinstance(children, list):
            raise NotADirectoryError(20, "Not a directory", key)
        return list(children)

    async def stat_path(self, path: Path) -> PathMetadata:
        key = Path(path).as_posix()
        self.stated.append(key)
        await self._enter()
        if key in self.failing_stats:
            raise PermissionError(13, "Permission denied", key)
        if key not in self.tree:
            raise FileNotFoundError(2, "No such file or directory", key)
        kind = self.tree[key]
        return PathMetadata(
            path=Path(path),
            is_file=kind == "file",
            is_dir=isinstance(kind, list),
        )


@pytest.fixture
def fake_fs() -> type[FakeFileSystem]:
    """Return the in-memory filesystem class for building test trees."""
    return FakeFileSystem
