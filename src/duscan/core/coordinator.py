"""Runs a scan alongside its progress display."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, TextIO

from duscan.config import UIConfig
from duscan.core.analyzer import Analyzer, IgnorePredicate
from duscan.core.poller import ProgressPoller
from duscan.core.signals import ScanSignals
from duscan.models.entry import Entry, ScanResult
from duscan.render.table import Palette

log = logging.getLogger(__name__)

PathChecker = Callable[[str], os.stat_result]
PollerFactory = Callable[[ScanSignals, TextIO, Palette], ProgressPoller]


class ScanCoordinator:
    """Coordinates one analyzer scan with an optional progress poller.

    Both activities run on their own threads and :meth:`analyze_path`
    returns only after both have ended. The tree produced by the scan
    thread is read only after that point.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        config: UIConfig,
        output: TextIO,
        path_checker: PathChecker = os.stat,
        poller_factory: PollerFactory = ProgressPoller,
    ) -> None:
        self.analyzer = analyzer
        self.config = config
        self._output = output
        self._path_checker = path_checker
        self._poller_factory = poller_factory

    def analyze_path(self, path: str, ignore: IgnorePredicate | None = None) -> ScanResult:
        """Scan *path* and return its immediate children, largest first.

        Args:
            path: Directory to scan; made absolute before use.
            ignore: Predicate for paths below *path* that must be skipped.

        Raises:
            OSError: If *path* does not exist or cannot be accessed. Raised
                before any scanning starts.
        """
        abspath = os.path.abspath(path)
        self._path_checker(abspath)

        signals = self.analyzer.reset()
        poller = None
        if self.config.show_progress:
            poller = self._poller_factory(signals, self._output, Palette(self.config.use_colors))

        log.info("Scanning %s", abspath)
        start = time.monotonic()

        futures: list[Future] = []
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="duscan") as executor:
            if poller is not None:
                futures.append(executor.submit(poller.run))
            scan_future = executor.submit(self.analyzer.analyze_dir, abspath, ignore)
            futures.append(scan_future)
        # Both threads have terminated here; surface any failure.
        for future in futures:
            future.result()

        root = scan_future.result()
        log.info(
            "Scanned %s: %d items in %.2fs",
            abspath,
            root.item_count,
            time.monotonic() - start,
        )
        return ScanResult(
            path=abspath,
            root=root,
            entries=sort_entries(root.children, self.config.show_apparent_size),
        )


def sort_entries(entries: tuple[Entry, ...] | list[Entry], apparent: bool) -> tuple[Entry, ...]:
    """Order entries by the selected size metric, largest first.

    Equal sizes keep their incoming order.
    """
    return tuple(sorted(entries, key=lambda e: e.metric(apparent), reverse=True))
