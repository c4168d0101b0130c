"""Tests for table rendering."""

from __future__ import annotations

import click
import pytest

from duscan.render.table import Column, Palette, TableRenderer, measure_width


class TestPalette:
    def test_disabled_returns_text(self):
        palette = Palette(False)
        assert palette.red("x") == "x"
        assert palette.orange("x") == "x"
        assert palette.blue("x") == "x"

    def test_enabled_styles_text(self):
        palette = Palette(True)
        assert palette.red("x") == click.style("x", fg="red", bold=True)
        assert palette.blue("x") == click.style("x", fg="blue", bold=True)
        assert click.unstyle(palette.orange("x")) == "x"


def test_measure_width():
    assert measure_width("Devices", ["sda1", "nvme0n1p2"]) == 9
    assert measure_width("Devices", []) == 7


class TestTableRenderer:
    COLUMNS = [Column("Name", 6), Column("Size", 5, 12), Column("Note")]

    def test_header_and_rows_aligned(self, output):
        table = TableRenderer(output, self.COLUMNS, Palette(False))
        table.write_header()
        table.write_rows([["a", "1", "x"], ["bbb", "22", "long note"]])
        assert output.getvalue().splitlines() == [
            "  Name  Size Note",
            "     a     1 x",
            "   bbb    22 long note",
        ]

    def test_header_labels_override(self, output):
        table = TableRenderer(output, self.COLUMNS, Palette(False))
        table.write_header(["N", "S", "Comment"])
        assert output.getvalue() == "     N     S Comment\n"

    def test_colored_rows_use_wider_fields(self, output):
        palette = Palette(True)
        table = TableRenderer(output, self.COLUMNS, palette)
        styled = palette.red("1")
        table.write_row(["a", styled, "x"])

        line = output.getvalue().rstrip("\n")
        assert line == f"     a {styled:>12} x"
        assert styled in line

    def test_colored_header_uses_plain_widths(self, output):
        table = TableRenderer(output, self.COLUMNS, Palette(True))
        table.write_header()
        assert output.getvalue() == "  Name  Size Note\n"

    def test_left_alignment(self, output):
        table = TableRenderer(output, [Column("A", 4, align="<"), Column("B")], Palette(False))
        table.write_row(["x", "y"])
        assert output.getvalue() == "x    y\n"

    def test_wrong_cell_count(self, output):
        table = TableRenderer(output, self.COLUMNS, Palette(False))
        with pytest.raises(ValueError):
            table.write_row(["only one"])

    def test_needs_columns(self, output):
        with pytest.raises(ValueError):
            TableRenderer(output, [], Palette(False))
