"""Traversal engine: concurrent recursive directory walk driven by skip predicates."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import os
from collections.abc import Callable, Coroutine, Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

from filenav import ConfigError, DirectoryListError, FilenavError, StatError
from filenav.filter import SkipPredicate, never_skip
from filenav.fs import FileSystem, LocalFileSystem, PathMetadata
from filenav.result import Err, Result, to_result

logger = logging.getLogger(__name__)

Callback = Callable[[Path, PathMetadata], Any]


@dataclass(frozen=True, slots=True)
class TraversalRequest:
    """Parameters of one traversal, shared by every directory it visits.

    Attributes:
        directory: Directory listed by this step of the walk.
        callback: Called as ``callback(path, metadata)`` for every file
            that is not skipped. May return an awaitable.
        file_skip: Files for which this returns ``True`` are skipped.
        dir_skip: Directories for which this returns ``True`` are pruned.
        recursive: Whether to descend into sub-directories at all.
        extra: Opaque caller data carried unchanged through the walk. Read
            it from callbacks and predicates with :func:`current_request`.
    """

    directory: Path
    callback: Callback
    file_skip: SkipPredicate = never_skip
    dir_skip: SkipPredicate = never_skip
    recursive: bool = False
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def descend(self, directory: Path) -> TraversalRequest:
        """Return a copy of this request rooted at *directory*."""
        return replace(self, directory=directory)


_current_request: ContextVar[TraversalRequest] = ContextVar("filenav_request")


@dataclass(slots=True)
class WalkReport:
    """Outcome counters of a finished traversal.

    Attributes:
        directories: Directories successfully listed.
        files: Files whose callback completed without raising.
        files_skipped: Files rejected by ``file_skip``.
        dirs_pruned: Directories not descended into.
        errors: Absorbed ``StatError`` and sub-directory
            ``DirectoryListError`` instances.
    """

    directories: int = 0
    files: int = 0
    files_skipped: int = 0
    dirs_pruned: int = 0
    errors: list[FilenavError] = field(default_factory=list)


class _Traversal:
    """State shared by all directory steps of a single traversal."""

    def __init__(self, fs: FileSystem, max_concurrency: int | None) -> None:
        self._fs = fs
        self._limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        self.report = WalkReport()

    def _limit(self) -> contextlib.AbstractAsyncContextManager[Any]:
        return self._limiter if self._limiter is not None else contextlib.nullcontext()

    async def _list(self, directory: Path) -> Result[list[str]]:
        async with self._limit():
            return await to_result(self._fs.list_directory(directory))

    async def _stat(self, path: Path) -> Result[PathMetadata]:
        async with self._limit():
            return await to_result(self._fs.stat_path(path))

    async def walk_directory(self, request: TraversalRequest) -> None:
        """List one directory and dispatch its entries.

        Completes once every file callback and every child walk issued
        for this directory has settled. *request* is the current request
        for predicates and callbacks run by this step.

        Raises:
            DirectoryListError: If *request.directory* cannot be listed.
        """
        token = _current_request.set(request)
        try:
            await self._walk_directory(request)
        finally:
            _current_request.reset(token)

    async def _walk_directory(self, request: TraversalRequest) -> None:
        listing = await self._list(request.directory)
        if isinstance(listing, Err):
            raise DirectoryListError(
                "error getting files", request.directory
            ) from listing.error
        self.report.directories += 1

        paths = [request.directory / name for name in listing.value]
        stats = await asyncio.gather(*(self._stat(p) for p in paths))

        pending: list[Coroutine[Any, Any, None]] = []
        try:
            for path, outcome in zip(paths, stats):
                if isinstance(outcome, Err):
                    logger.warning(
                        "Error occurred while reading %s: %s", path, outcome.error
                    )
                    error = StatError(f"cannot stat {path}", path)
                    error.__cause__ = outcome.error
                    self.report.errors.append(error)
                    continue
                step = self._dispatch(request, path, outcome.value)
                if step is not None:
                    pending.append(step)
        except BaseException:
            # A predicate raised: drop the steps that will never run.
            for step in pending:
                step.close()
            raise

        if not pending:
            return
        outcomes = await asyncio.gather(*pending, return_exceptions=True)

        failure: BaseException | None = None
        for outcome in outcomes:
            if isinstance(outcome, DirectoryListError):
                logger.warning(
                    "Error getting files in %s: %s", outcome.path, outcome.__cause__
                )
                self.report.errors.append(outcome)
            elif isinstance(outcome, BaseException) and failure is None:
                failure = outcome
        if failure is not None:
            raise failure

    def _dispatch(
        self, request: TraversalRequest, path: Path, metadata: PathMetadata
    ) -> Coroutine[Any, Any, None] | None:
        if metadata.is_file:
            if request.file_skip(path, metadata):
                self.report.files_skipped += 1
                return None
            return self._invoke(request.callback, path, metadata)

        if metadata.is_dir:
            # Predicate only consulted when recursion is on.
            if not request.recursive or request.dir_skip(path, metadata):
                self.report.dirs_pruned += 1
                return None
            return self.walk_directory(request.descend(path))

        logger.debug("Ignoring %s: neither file nor directory", path)
        return None

    async def _invoke(
        self, callback: Callback, path: Path, metadata: PathMetadata
    ) -> None:
        result = callback(path, metadata)
        if inspect.isawaitable(result):
            await result
        self.report.files += 1


def current_request() -> TraversalRequest:
    """Return the request of the traversal step running in this context.

    Callbacks and skip predicates use it to read ``extra`` and the
    directory being processed.

    Raises:
        LookupError: When called outside a traversal.
    """
    return _current_request.get()


async def traverse(
    root: str | os.PathLike[str],
    callback: Callback | None = None,
    *,
    file_skip: SkipPredicate | None = None,
    dir_skip: SkipPredicate | None = None,
    recursive: bool = False,
    max_concurrency: int | None = None,
    fs: FileSystem | None = None,
    extra: Mapping[str, Any] | None = None,
) -> WalkReport:
    """Walk *root* and invoke *callback* for every file that is not skipped.

    Entries of a directory are stat'ed concurrently and their callbacks
    and sub-directory walks run concurrently. The returned coroutine
    completes when the whole tree has been processed.

    Args:
        root: Directory to start from.
        callback: ``callback(path, metadata)``, sync or async.
        file_skip: Skip predicate for files. Defaults to skipping nothing.
        dir_skip: Prune predicate for directories. Defaults to pruning
            nothing.
        recursive: Descend into sub-directories.
        max_concurrency: Upper bound on in-flight list/stat calls.
            ``None`` means unbounded.
        fs: Filesystem accessor. Defaults to :class:`LocalFileSystem`.
        extra: Opaque data stored on the request, readable through
            :func:`current_request`.

    Returns:
        WalkReport: Counters and absorbed errors.

    Raises:
        ConfigError: If *callback* is missing or options are invalid.
        DirectoryListError: If *root* cannot be listed.
    """
    if callback is None:
        raise ConfigError("no callback")
    if not callable(callback):
        raise ConfigError(f"callback is not callable: {callback!r}")
    if max_concurrency is not None and max_concurrency < 1:
        raise ConfigError("max_concurrency must be a positive integer")

    request = TraversalRequest(
        directory=Path(root),
        callback=callback,
        file_skip=file_skip or never_skip,
        dir_skip=dir_skip or never_skip,
        recursive=recursive,
        extra=MappingProxyType(dict(extra or {})),
    )
    logger.debug("Walking %s (recursive=%s)", request.directory, recursive)

    traversal = _Traversal(fs or LocalFileSystem(), max_concurrency)
    await traversal.walk_directory(request)
    return traversal.report


def walk(
    root: str | os.PathLike[str], callback: Callback | None = None, **kwargs: Any
) -> WalkReport:
    """Run :func:`traverse` to completion on a fresh event loop.

    Args:
        root: Directory to start from.
        callback: ``callback(path, metadata)``, sync or async.
        **kwargs: Keyword options of :func:`traverse`.

    Returns:
        WalkReport: Counters and absorbed errors.
    """
    return asyncio.run(traverse(root, callback, **kwargs))
