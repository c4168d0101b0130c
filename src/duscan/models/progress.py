"""Progress snapshot dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Point-in-time reading of a running scan."""

    item_count: int = 0
    total_size: int = 0
