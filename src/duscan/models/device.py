"""Mounted device dataclass."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Device:
    """Mounted storage device as reported by the OS at listing time."""

    name: str
    size: int
    free: int
    mount_point: str

    @property
    def used(self) -> int:
        """Bytes in use."""
        return self.size - self.free

    @property
    def used_percent(self) -> int | None:
        """Percentage of the device in use (half rounds up), or None for a zero-size device."""
        if self.size <= 0:
            return None
        return math.floor(self.used / self.size * 100 + 0.5)
