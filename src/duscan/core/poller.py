"""Spinner line shown while a scan is running."""

from __future__ import annotations

import logging
from typing import TextIO

import click

from duscan.core.signals import ScanSignals
from duscan.models.progress import ProgressSnapshot
from duscan.render.table import Palette
from duscan.utils import format_size

log = logging.getLogger(__name__)

SPINNER = "⠇⠏⠋⠙⠹⠸⠼⠴⠦⠧"
_LINE_WIDTH = 100
_EMPTY_LINE = "\r" + " " * _LINE_WIDTH + "\r"


class ProgressPoller:
    """Redraws a one-line progress indicator until the scan finishes.

    Each fresh snapshot erases the line and draws the next spinner glyph with
    the item count and cumulative size, then waits *interval* seconds before
    looking again. Once completion is observed the line is erased and
    :meth:`run` returns; a snapshot still pending at that point is dropped.
    """

    def __init__(
        self,
        signals: ScanSignals,
        output: TextIO,
        palette: Palette,
        interval: float = 0.1,
    ) -> None:
        self._signals = signals
        self._output = output
        self._palette = palette
        self._interval = interval
        self.frames_drawn = 0

    def run(self) -> None:
        """Poll until completion. Never raises on a normal scan end."""
        frame = 0
        while True:
            snapshot = self._signals.next_snapshot()
            if snapshot is None:
                break

            # Holding the lock keeps finish() from completing mid-draw.
            with self._signals.lock:
                if self._signals.is_done:
                    break
                self._draw(SPINNER[frame], snapshot)

            frame = (frame + 1) % len(SPINNER)
            if self._signals.wait_done(self._interval):
                break

        self._echo(_EMPTY_LINE)
        log.debug("Progress display stopped after %d frame(s)", self.frames_drawn)

    def _draw(self, glyph: str, snapshot: ProgressSnapshot) -> None:
        self._echo(
            f"{_EMPTY_LINE} {glyph} Scanning... Total items: "
            f"{self._palette.red(str(snapshot.item_count))} "
            f"size: {format_size(snapshot.total_size, self._palette)}"
        )
        self.frames_drawn += 1

    def _echo(self, text: str) -> None:
        click.echo(text, file=self._output, nl=False, color=self._palette.enabled)
