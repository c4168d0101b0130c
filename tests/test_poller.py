"""Tests for the progress spinner."""

from __future__ import annotations

import threading
import time

from duscan.core.poller import SPINNER, ProgressPoller, _EMPTY_LINE
from duscan.core.signals import ScanSignals
from duscan.models.progress import ProgressSnapshot
from duscan.render.table import Palette


def _poller(signals, output, interval=0.0):
    return ProgressPoller(signals, output, Palette(False), interval=interval)


class TestProgressPoller:
    def test_completion_before_start_draws_nothing(self, output):
        signals = ScanSignals()
        signals.finish()
        poller = _poller(signals, output)
        poller.run()
        assert output.getvalue() == _EMPTY_LINE
        assert poller.frames_drawn == 0

    def test_simultaneous_snapshot_and_completion(self, output):
        signals = ScanSignals()
        signals.publish(ProgressSnapshot(item_count=42, total_size=2048))
        signals.finish()
        poller = _poller(signals, output)
        poller.run()
        assert "Scanning" not in output.getvalue()
        assert poller.frames_drawn == 0

    def test_draws_snapshot(self, output):
        signals = ScanSignals()
        signals.publish(ProgressSnapshot(item_count=42, total_size=2048))
        poller = _poller(signals, output)
        thread = threading.Thread(target=poller.run)
        thread.start()

        deadline = time.monotonic() + 2
        while poller.frames_drawn == 0 and time.monotonic() < deadline:
            time.sleep(0.005)
        signals.finish()
        thread.join(timeout=2)

        assert not thread.is_alive()
        text = output.getvalue()
        assert f" {SPINNER[0]} Scanning... Total items: 42 size: 2.0 KiB" in text
        assert text.endswith(_EMPTY_LINE)

    def test_spinner_cycles(self, output):
        signals = ScanSignals()
        poller = _poller(signals, output)
        thread = threading.Thread(target=poller.run)
        thread.start()

        for i in range(12):
            signals.publish(ProgressSnapshot(item_count=i, total_size=i))
            deadline = time.monotonic() + 2
            while poller.frames_drawn <= i and time.monotonic() < deadline:
                time.sleep(0.002)
        signals.finish()
        thread.join(timeout=2)

        text = output.getvalue()
        assert poller.frames_drawn == 12
        for glyph in SPINNER:
            assert f" {glyph} Scanning..." in text
        # Frame 11 wraps round to the second glyph.
        assert text.rindex(f" {SPINNER[1]} Scanning... Total items: 11") > 0

    def test_nothing_drawn_after_finish(self, output):
        signals = ScanSignals()
        poller = _poller(signals, output)
        thread = threading.Thread(target=poller.run)
        thread.start()

        stop = threading.Event()

        def publisher():
            n = 0
            while not stop.is_set():
                n += 1
                signals.publish(ProgressSnapshot(item_count=n, total_size=n))

        pub = threading.Thread(target=publisher)
        pub.start()
        time.sleep(0.05)
        signals.finish()
        position = len(output.getvalue())
        stop.set()
        pub.join(timeout=2)
        thread.join(timeout=2)

        assert not thread.is_alive()
        tail = output.getvalue()[position:]
        assert "Scanning" not in tail
        assert tail in ("", _EMPTY_LINE)
        assert output.getvalue().endswith(_EMPTY_LINE)

    def test_pacing_interrupted_by_completion(self, output):
        signals = ScanSignals()
        signals.publish(ProgressSnapshot(item_count=1, total_size=1))
        poller = _poller(signals, output, interval=10)
        thread = threading.Thread(target=poller.run)
        thread.start()

        deadline = time.monotonic() + 2
        while poller.frames_drawn == 0 and time.monotonic() < deadline:
            time.sleep(0.005)
        start = time.monotonic()
        signals.finish()
        thread.join(timeout=2)

        assert not thread.is_alive()
        assert time.monotonic() - start < 2

    def test_colored_item_count(self, output):
        signals = ScanSignals()
        signals.publish(ProgressSnapshot(item_count=7, total_size=0))
        poller = ProgressPoller(signals, output, Palette(True), interval=0)
        thread = threading.Thread(target=poller.run)
        thread.start()
        deadline = time.monotonic() + 2
        while poller.frames_drawn == 0 and time.monotonic() < deadline:
            time.sleep(0.005)
        signals.finish()
        thread.join(timeout=2)

        assert "\x1b[" in output.getvalue()
