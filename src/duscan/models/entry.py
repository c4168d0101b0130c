"""Scan entry and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

FLAG_NONE = " "
FLAG_READ_ERROR = "!"
FLAG_NESTED_ERROR = "."
FLAG_OTHER = "@"
FLAG_HARDLINK = "H"
FLAG_EMPTY_DIR = "e"


@dataclass(frozen=True, slots=True)
class Entry:
    """Single file or directory produced by a scan.

    ``size`` is the apparent size and ``usage`` the bytes allocated on disk;
    for directories both include everything below them. ``flag`` is a
    one-character status marker, see the ``FLAG_*`` constants.
    """

    name: str
    size: int = 0
    usage: int = 0
    is_dir: bool = False
    flag: str = FLAG_NONE
    children: tuple[Entry, ...] = ()
    item_count: int = 1

    def __post_init__(self) -> None:
        if self.size < 0 or self.usage < 0:
            raise ValueError(f"Entry '{self.name}' has a negative size")
        if len(self.flag) != 1:
            raise ValueError(f"Entry flag must be a single character, got {self.flag!r}")

    def metric(self, apparent: bool) -> int:
        """Return the apparent size when *apparent* is set, on-disk usage otherwise."""
        return self.size if apparent else self.usage


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Completed scan of one directory.

    ``entries`` holds the root's immediate children in display order.
    """

    path: str
    root: Entry
    entries: tuple[Entry, ...] = ()
