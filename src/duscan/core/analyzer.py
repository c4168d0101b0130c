"""Directory tree analyzers."""

from __future__ import annotations

import logging
import os
import stat
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

from duscan.core.signals import ScanSignals
from duscan.models.entry import (
    FLAG_EMPTY_DIR,
    FLAG_HARDLINK,
    FLAG_NESTED_ERROR,
    FLAG_NONE,
    FLAG_OTHER,
    FLAG_READ_ERROR,
    Entry,
)
from duscan.models.progress import ProgressSnapshot

log = logging.getLogger(__name__)

IgnorePredicate = Callable[[str], bool]

_BLOCK_SIZE = 512
_ERROR_FLAGS = (FLAG_READ_ERROR, FLAG_NESTED_ERROR)


def _ignore_nothing(path: str) -> bool:
    return False


class Analyzer(ABC):
    """Base class for anything that can build a usage tree for a directory.

    Subclasses implement :meth:`_analyze`. Progress goes through
    :attr:`signals`; :meth:`analyze_dir` always signals completion when it
    returns or raises, so observers waiting on the signals never hang.
    """

    def __init__(self) -> None:
        self._signals = ScanSignals()

    @property
    def signals(self) -> ScanSignals:
        """Progress feed and completion feed of the current scan."""
        return self._signals

    def reset(self) -> ScanSignals:
        """Install fresh signals for the next scan and return them."""
        self._signals = ScanSignals()
        return self._signals

    def analyze_dir(self, path: str, ignore: IgnorePredicate | None = None) -> Entry:
        """Scan *path* recursively and return its entry.

        Args:
            path: Absolute path of the directory to scan. Never filtered itself.
            ignore: Predicate consulted for every path below *path*; matching
                paths are left out of the tree.
        """
        try:
            return self._analyze(path, ignore or _ignore_nothing)
        finally:
            self._signals.finish()

    @abstractmethod
    def _analyze(self, path: str, ignore: IgnorePredicate) -> Entry:
        """Build the tree for *path*. MUST NOT modify the filesystem."""


class FilesystemAnalyzer(Analyzer):
    """Walks a real directory tree with ``os.scandir``.

    The root's immediate children are walked on a small thread pool; each
    subtree below them is walked sequentially by the worker that owns it.
    Symlinks are never followed. Read errors never abort the scan: the
    failing entry is flagged ``!`` and every directory above it ``.``.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        super().__init__()
        self._max_workers = max_workers or min(4, os.cpu_count() or 1)
        self._lock = threading.Lock()
        self._seen_inodes: set[tuple[int, int]] = set()
        self._item_count = 0
        self._total_size = 0

    def _analyze(self, path: str, ignore: IgnorePredicate) -> Entry:
        with self._lock:
            self._seen_inodes = set()
            self._item_count = 0
            self._total_size = 0

        name = os.path.basename(path.rstrip(os.sep)) or path
        try:
            st = os.stat(path)
        except OSError as e:
            log.warning("Cannot stat %s: %s", path, e)
            return Entry(name=name, is_dir=True, flag=FLAG_READ_ERROR)

        if not stat.S_ISDIR(st.st_mode):
            return self._file_entry(name, st)

        try:
            with os.scandir(path) as it:
                items = list(it)
        except OSError as e:
            log.warning("Cannot read %s: %s", path, e)
            return Entry(name=name, is_dir=True, flag=FLAG_READ_ERROR)

        subdirs = sum(1 for item in items if _is_dir(item))
        if self._max_workers > 1 and subdirs > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="duscan-walk") as executor:
                children = list(executor.map(lambda item: self._child_entry(item, ignore), items))
        else:
            children = [self._child_entry(item, ignore) for item in items]

        root = self._dir_entry(name, [c for c in children if c is not None], st)
        self._publish()
        log.debug("Analyzed %s: %d items, %d bytes", path, root.item_count, root.size)
        return root

    def _child_entry(self, item: os.DirEntry, ignore: IgnorePredicate) -> Entry | None:
        """Build the entry for one item of the root, or None if it is ignored."""
        entry, pending = self._visit(item, ignore)
        if pending is None:
            return entry
        return self._walk(pending, ignore)

    def _visit(self, item: os.DirEntry, ignore: IgnorePredicate) -> tuple[Entry | None, _PendingDir | None]:
        """Stat one item.

        Returns a finished entry for files and unreadable items, a pending
        directory still to be walked, or neither for an ignored directory.
        """
        try:
            st = item.stat(follow_symlinks=False)
        except OSError as e:
            if _is_dir(item) and ignore(item.path):
                return None, None
            log.debug("Cannot stat %s: %s", item.path, e)
            self._count(0)
            return Entry(name=item.name, is_dir=_is_dir(item), flag=FLAG_READ_ERROR), None

        if not stat.S_ISDIR(st.st_mode):
            return self._file_entry(item.name, st), None
        if ignore(item.path):
            log.debug("Skipping ignored directory: %s", item.path)
            return None, None

        try:
            with os.scandir(item.path) as it:
                items = list(it)
        except OSError as e:
            log.debug("Cannot read %s: %s", item.path, e)
            self._count(st.st_size)
            return (
                Entry(
                    name=item.name,
                    size=st.st_size,
                    usage=_usage(st),
                    is_dir=True,
                    flag=FLAG_READ_ERROR,
                ),
                None,
            )
        return None, _PendingDir(item.name, st, items)

    def _walk(self, top: _PendingDir, ignore: IgnorePredicate) -> Entry:
        """Build a subdirectory's entry depth-first with an explicit stack.

        Directories are finished bottom-up, so tree depth is not bounded by
        the interpreter's recursion limit.
        """
        stack = [top]
        while True:
            current = stack[-1]
            if current.position < len(current.items):
                item = current.items[current.position]
                current.position += 1
                entry, pending = self._visit(item, ignore)
                if pending is not None:
                    stack.append(pending)
                elif entry is not None:
                    current.children.append(entry)
                continue

            stack.pop()
            entry = self._dir_entry(current.name, current.children, current.st)
            self._publish()
            if not stack:
                return entry
            stack[-1].children.append(entry)

    def _dir_entry(self, name: str, children: list[Entry], st: os.stat_result) -> Entry:
        self._count(st.st_size)
        if any(c.flag in _ERROR_FLAGS for c in children):
            flag = FLAG_NESTED_ERROR
        elif not children:
            flag = FLAG_EMPTY_DIR
        else:
            flag = FLAG_NONE
        return Entry(
            name=name,
            size=st.st_size + sum(c.size for c in children),
            usage=_usage(st) + sum(c.usage for c in children),
            is_dir=True,
            flag=flag,
            children=tuple(children),
            item_count=1 + sum(c.item_count for c in children),
        )

    def _file_entry(self, name: str, st: os.stat_result) -> Entry:
        usage = _usage(st)
        flag = FLAG_NONE if stat.S_ISREG(st.st_mode) else FLAG_OTHER

        # Hard links share one inode; count its blocks only once per scan.
        if stat.S_ISREG(st.st_mode) and st.st_nlink > 1:
            key = (st.st_dev, st.st_ino)
            with self._lock:
                if key in self._seen_inodes:
                    usage = 0
                    flag = FLAG_HARDLINK
                else:
                    self._seen_inodes.add(key)

        self._count(st.st_size)
        return Entry(name=name, size=st.st_size, usage=usage, flag=flag)

    def _count(self, size: int) -> None:
        with self._lock:
            self._item_count += 1
            self._total_size += size

    def _publish(self) -> None:
        with self._lock:
            snapshot = ProgressSnapshot(item_count=self._item_count, total_size=self._total_size)
        self.signals.publish(snapshot)


def _is_dir(item: os.DirEntry) -> bool:
    try:
        return item.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _usage(st: os.stat_result) -> int:
    """Bytes allocated on disk; falls back to the apparent size where blocks are unknown."""
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * _BLOCK_SIZE


@dataclass(slots=True)
class _PendingDir:
    """Directory whose listing has been read but whose children are not all built."""

    name: str
    st: os.stat_result
    items: list[os.DirEntry]
    children: list[Entry] = field(default_factory=list)
    position: int = 0
