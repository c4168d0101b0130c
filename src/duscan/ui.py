"""Plain-text front end: scan listing and device table."""

from __future__ import annotations

import logging
import os
from typing import Iterable, TextIO

from duscan.config import UIConfig
from duscan.core.analyzer import Analyzer, FilesystemAnalyzer
from duscan.core.coordinator import PathChecker, ScanCoordinator
from duscan.core.ignore import IgnoreSet
from duscan.devices import DevicesInfoGetter
from duscan.models.device import Device
from duscan.models.entry import ScanResult
from duscan.render.table import Column, Palette, TableRenderer, measure_width
from duscan.utils import format_size

log = logging.getLogger(__name__)

DEVICE_HEADER = ("Device", "Size", "Used", "Free", "Used%", "Mount point")
NOT_APPLICABLE = "-"

_SIZE_WIDTH = 9
_SIZE_COLOR_WIDTH = 20
_PERCENT_WIDTH = 5
_PERCENT_COLOR_WIDTH = 16


class StdoutUI:
    """Writes scan results and device usage as text tables to *output*."""

    def __init__(
        self,
        output: TextIO,
        config: UIConfig,
        analyzer: Analyzer | None = None,
        path_checker: PathChecker = os.stat,
    ) -> None:
        self.output = output
        self.config = config
        self.palette = Palette(config.use_colors)
        self.coordinator = ScanCoordinator(
            analyzer or FilesystemAnalyzer(),
            config,
            output,
            path_checker=path_checker,
        )
        self._ignore = IgnoreSet()

    # ── ignored paths ────────────────────────────────────────────────────

    def set_ignore_dir_paths(self, paths: Iterable[str]) -> None:
        """Replace the set of paths skipped by the next scan."""
        self._ignore = IgnoreSet(paths)

    def should_dir_be_ignored(self, path: str) -> bool:
        return self._ignore.should_ignore(path)

    # ── analysis ─────────────────────────────────────────────────────────

    def analyze_path(self, path: str) -> ScanResult:
        """Scan *path* and print its immediate children, largest first.

        Raises:
            OSError: If *path* cannot be accessed; nothing is printed.
        """
        result = self.coordinator.analyze_path(path, self._ignore)
        self.render_entries(result)
        return result

    def render_entries(self, result: ScanResult) -> None:
        """Print one ``flag size name`` line per entry."""
        table = TableRenderer(
            self.output,
            [
                Column("Flag"),
                Column("Size", _SIZE_WIDTH, _SIZE_COLOR_WIDTH),
                Column("Name"),
            ],
            self.palette,
        )
        apparent = self.config.show_apparent_size
        for entry in result.entries:
            name = self.palette.blue("/" + entry.name) if entry.is_dir else entry.name
            table.write_row([entry.flag, format_size(entry.metric(apparent), self.palette), name])

    # ── devices ──────────────────────────────────────────────────────────

    def list_devices(self, getter: DevicesInfoGetter) -> list[Device]:
        """Print mounted devices with their size, usage and mount point.

        Raises:
            DeviceInfoError: If the device list cannot be obtained.
        """
        devices = getter.get_devices_info()

        name_width = measure_width("Devices", (d.name for d in devices))
        table = TableRenderer(
            self.output,
            [
                Column("Device", name_width),
                Column("Size", _SIZE_WIDTH, _SIZE_COLOR_WIDTH),
                Column("Used", _SIZE_WIDTH, _SIZE_COLOR_WIDTH),
                Column("Free", _SIZE_WIDTH, _SIZE_COLOR_WIDTH),
                Column("Used%", _PERCENT_WIDTH, _PERCENT_COLOR_WIDTH),
                Column("Mount point"),
            ],
            self.palette,
        )
        table.write_header(DEVICE_HEADER)

        for device in devices:
            percent = device.used_percent
            if percent is None:
                log.debug("Device %s reports zero size", device.name)
                percent_text = NOT_APPLICABLE
            else:
                percent_text = f"{percent}%"
            table.write_row(
                [
                    device.name,
                    format_size(device.size, self.palette),
                    format_size(device.used, self.palette),
                    format_size(device.free, self.palette),
                    self.palette.red(percent_text),
                    device.mount_point,
                ]
            )
        return devices
