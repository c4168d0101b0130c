"""Text rendering helpers."""

from duscan.render.table import Column, Palette, TableRenderer, measure_width

__all__ = ["Column", "Palette", "TableRenderer", "measure_width"]
