"""Filesystem accessor: async directory listing and metadata lookup."""

from __future__ import annotations

import asyncio
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class PathMetadata:
    """Metadata for a single filesystem path.

    Attributes:
        path: Path the metadata was looked up for.
        is_file: Whether the path is a regular file.
        is_dir: Whether the path is a directory.
        size: Size in bytes.
        mode: Raw ``st_mode`` bits.
        atime: Last access time (seconds since epoch).
        mtime: Last modification time (seconds since epoch).
        ctime: Metadata change time (seconds since epoch).
    """

    path: Path
    is_file: bool
    is_dir: bool
    size: int = 0
    mode: int = 0
    atime: float = 0.0
    mtime: float = 0.0
    ctime: float = 0.0

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_stat(cls, path: Path, st: os.stat_result) -> PathMetadata:
        """Build metadata from an ``os.stat_result``.

        Args:
            path: Path that was stat'ed.
            st: Result of ``os.stat``.

        Returns:
            PathMetadata: Classified metadata.
        """
        return cls(
            path=path,
            is_file=stat.S_ISREG(st.st_mode),
            is_dir=stat.S_ISDIR(st.st_mode),
            size=st.st_size,
            mode=st.st_mode,
            atime=st.st_atime,
            mtime=st.st_mtime,
            ctime=st.st_ctime,
        )


class FileSystem(Protocol):
    """Protocol for the two filesystem primitives the walker needs.

    Both operations raise ``OSError`` on failure.
    """

    async def list_directory(self, path: Path) -> list[str]: ...

    async def stat_path(self, path: Path) -> PathMetadata: ...


class LocalFileSystem:
    """Local filesystem backed by ``os`` calls run in worker threads."""

    async def list_directory(self, path: Path) -> list[str]:
        return await list_directory(path)

    async def stat_path(self, path: Path) -> PathMetadata:
        return await stat_path(path)


async def list_directory(path: Path) -> list[str]:
    """Return the bare entry names of *path*.

    Order is whatever the filesystem yields and carries no meaning.

    Args:
        path: Directory to list.

    Returns:
        list[str]: Entry names (not paths).

    Raises:
        OSError: If *path* is missing, not a directory, or unreadable.
    """
    return await asyncio.to_thread(os.listdir, path)


async def stat_path(path: Path) -> PathMetadata:
    """Look up metadata for *path*, following symlinks.

    Args:
        path: Path to stat.

    Returns:
        PathMetadata: Classified metadata.

    Raises:
        OSError: If *path* no longer exists or is inaccessible.
    """
    st = await asyncio.to_thread(os.stat, path)
    return PathMetadata.from_stat(Path(path), st)
