"""duscan data models."""

from duscan.models.device import Device
from duscan.models.entry import Entry, ScanResult
from duscan.models.progress import ProgressSnapshot

__all__ = [
    "Device",
    "Entry",
    "ProgressSnapshot",
    "ScanResult",
]
