"""Rendering configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UIConfig:
    """Options shared by the scan coordinator and the text renderers.

    Colour mode lives here rather than in process-wide state, so every
    renderer receives it explicitly.
    """

    use_colors: bool = False
    show_progress: bool = True
    show_apparent_size: bool = False
