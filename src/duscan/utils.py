"""Shared utility functions."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duscan.render.table import Palette

_TIB = 2**40
_GIB = 2**30
_MIB = 2**20
_KIB = 2**10


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def format_size(size: int, palette: Palette | None = None) -> str:
    """Convert a byte count to a human-readable string.

    The unit is picked with decimal thresholds (exclusive lower bounds) while
    the displayed value is divided by the matching binary power, so
    ``1001`` renders as ``1.0 KiB`` and ``1000`` stays ``1000 B``.

    Args:
        size: Byte count. Not modified.
        palette: When given, the numeric part is styled with its orange colour.
    """
    if size > 1e12:
        number, unit = f"{size / _TIB:.1f}", "TiB"
    elif size > 1e9:
        number, unit = f"{size / _GIB:.1f}", "GiB"
    elif size > 1e6:
        number, unit = f"{size / _MIB:.1f}", "MiB"
    elif size > 1e3:
        number, unit = f"{size / _KIB:.1f}", "KiB"
    else:
        number, unit = f"{size:d}", "B"

    if palette is not None:
        number = palette.orange(number)
    return f"{number} {unit}"

