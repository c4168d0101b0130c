"""Column-aligned text tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, TextIO

import click


class Palette:
    """Terminal styles for one rendering configuration.

    With colours disabled every method returns its text untouched, so callers
    never need to branch on the colour mode themselves.
    """

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    def _style(self, text: str, **styles) -> str:
        if not self.enabled:
            return text
        return click.style(text, **styles)

    def red(self, text: str) -> str:
        return self._style(text, fg="red", bold=True)

    def orange(self, text: str) -> str:
        return self._style(text, fg="yellow", bold=True)

    def blue(self, text: str) -> str:
        return self._style(text, fg="blue", bold=True)


@dataclass(frozen=True)
class Column:
    """One table column.

    ``color_width`` replaces ``width`` when styling is on: escape sequences
    add characters to the string without adding visible width.
    """

    label: str
    width: int = 0
    color_width: int | None = None
    align: str = ">"

    def field_width(self, colored: bool) -> int:
        if colored and self.color_width is not None:
            return self.color_width
        return self.width


def measure_width(label: str, values: Iterable[str]) -> int:
    """Return the widest of *label* and *values*."""
    return max([len(label), *(len(v) for v in values)])


class TableRenderer:
    """Writes a header and aligned rows to a text stream.

    Every column but the last is padded to its field width; the last column
    is written as-is.
    """

    def __init__(self, output: TextIO, columns: Sequence[Column], palette: Palette) -> None:
        if not columns:
            raise ValueError("A table needs at least one column")
        self._output = output
        self._columns = tuple(columns)
        self._palette = palette

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    def write_header(self, labels: Sequence[str] | None = None) -> None:
        """Write the header line using the plain (unstyled) widths."""
        labels = labels if labels is not None else [c.label for c in self._columns]
        self._write(labels, colored=False)

    def write_row(self, cells: Sequence[str]) -> None:
        """Write one data row, using colour-mode widths."""
        self._write(cells, colored=self._palette.enabled)

    def write_rows(self, rows: Iterable[Sequence[str]]) -> None:
        for row in rows:
            self.write_row(row)

    def _write(self, cells: Sequence[str], colored: bool) -> None:
        if len(cells) != len(self._columns):
            raise ValueError(f"Expected {len(self._columns)} cells, got {len(cells)}")

        parts = []
        last = len(self._columns) - 1
        for i, (column, cell) in enumerate(zip(self._columns, cells)):
            if i == last:
                parts.append(cell)
            else:
                parts.append(f"{cell:{column.align}{column.field_width(colored)}}")
        click.echo(" ".join(parts), file=self._output, color=self._palette.enabled)
