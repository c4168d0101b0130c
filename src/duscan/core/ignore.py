"""Set of directory paths excluded from a scan."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator

log = logging.getLogger(__name__)


class IgnoreSet:
    """Immutable set of absolute paths the analyzer must not descend into.

    Built once before a scan and only read afterwards, so lookups from
    several walker threads need no locking. Instances are callable and can
    be passed directly as an ignore predicate.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths = frozenset(os.path.abspath(p) for p in paths if p)
        if self._paths:
            log.debug("Ignoring %d path(s): %s", len(self._paths), ", ".join(sorted(self._paths)))

    @classmethod
    def from_csv(cls, value: str) -> IgnoreSet:
        """Build from a comma-separated list, e.g. ``/proc,/dev,/sys``."""
        return cls(part.strip() for part in value.split(","))

    def should_ignore(self, path: str) -> bool:
        """Return True if *path* is in the set."""
        return path in self._paths

    def __call__(self, path: str) -> bool:
        return self.should_ignore(path)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    def __repr__(self) -> str:
        return f"IgnoreSet({sorted(self._paths)!r})"
