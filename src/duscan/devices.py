"""Mounted device discovery."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from duscan.models.device import Device

log = logging.getLogger(__name__)

MOUNTS_FILE = Path("/proc/mounts")


class DeviceInfoError(Exception):
    """Raised when the list of mounted devices cannot be obtained."""


class DevicesInfoGetter(ABC):
    """Source of mounted device information."""

    @abstractmethod
    def get_devices_info(self) -> list[Device]:
        """Return mounted devices with their capacity.

        Raises:
            DeviceInfoError: If the device list cannot be read at all.
        """


class MountsDevicesInfoGetter(DevicesInfoGetter):
    """Reads block device mounts from ``/proc/mounts`` and sizes them with ``statvfs``.

    Only sources under ``/dev`` are listed; loop devices (snaps, images) and
    repeated mounts of the same device are skipped.
    """

    def __init__(self, mounts_file: Path = MOUNTS_FILE) -> None:
        self._mounts_file = mounts_file

    def get_devices_info(self) -> list[Device]:
        try:
            lines = self._mounts_file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise DeviceInfoError(f"Cannot read mount table {self._mounts_file}: {e}") from e

        devices: list[Device] = []
        seen: set[str] = set()
        for line in lines:
            parts = line.split()
            if len(parts) < 2:
                continue
            name, mount_point = parts[0], _unescape(parts[1])
            if not name.startswith("/dev") or name.startswith("/dev/loop") or name in seen:
                continue
            seen.add(name)

            try:
                st = os.statvfs(mount_point)
            except OSError as e:
                log.warning("Cannot stat mount point %s: %s", mount_point, e)
                continue

            devices.append(
                Device(
                    name=name,
                    size=st.f_blocks * st.f_frsize,
                    free=st.f_bavail * st.f_frsize,
                    mount_point=mount_point,
                )
            )

        log.debug("Found %d mounted device(s)", len(devices))
        return devices


def _unescape(field: str) -> str:
    """Decode the octal escapes ``/proc/mounts`` uses for spaces, tabs and backslashes."""
    return (
        field.replace("\\040", " ")
        .replace("\\011", "\t")
        .replace("\\012", "\n")
        .replace("\\134", "\\")
    )
