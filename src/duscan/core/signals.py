"""Progress and completion signals between an analyzer and its observers."""

from __future__ import annotations

import threading

from duscan.models.progress import ProgressSnapshot


class ScanSignals:
    """Latest-value progress slot plus a one-shot completion flag.

    Both halves share one condition so an observer can block on "a new
    snapshot or completion, whichever comes first". Snapshots are never
    queued: publishing replaces any snapshot not yet taken. Completion
    always wins over a pending snapshot.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._snapshot: ProgressSnapshot | None = None
        self._done = False

    @property
    def lock(self) -> threading.Condition:
        """The condition guarding both signals; usable as a context manager."""
        return self._cond

    @property
    def is_done(self) -> bool:
        return self._done

    def publish(self, snapshot: ProgressSnapshot) -> None:
        """Replace the pending snapshot. Ignored once the scan has finished."""
        with self._cond:
            if self._done:
                return
            self._snapshot = snapshot
            self._cond.notify_all()

    def finish(self) -> None:
        """Signal completion and drop any snapshot nobody has taken."""
        with self._cond:
            self._done = True
            self._snapshot = None
            self._cond.notify_all()

    def next_snapshot(self, timeout: float | None = None) -> ProgressSnapshot | None:
        """Block until a fresh snapshot is available or the scan finishes.

        Returns the snapshot, consuming it, or None once completion has been
        signalled (or *timeout* expired without either).
        """
        with self._cond:
            self._cond.wait_for(lambda: self._done or self._snapshot is not None, timeout)
            if self._done:
                return None
            snapshot, self._snapshot = self._snapshot, None
            return snapshot

    def wait_done(self, timeout: float | None = None) -> bool:
        """Wait up to *timeout* seconds for completion; return whether it happened."""
        with self._cond:
            return self._cond.wait_for(lambda: self._done, timeout)
