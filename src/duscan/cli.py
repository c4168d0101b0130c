"""CLI interface for duscan."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from duscan.config import UIConfig
from duscan.devices import DeviceInfoError, MountsDevicesInfoGetter
from duscan.settings import Settings
from duscan.ui import StdoutUI


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_config(settings: Settings, no_color: bool, no_progress: bool, apparent: bool) -> UIConfig:
    is_tty = sys.stdout.isatty()
    return UIConfig(
        use_colors=not no_color and settings.get_bool("display.colors", is_tty),
        show_progress=not no_progress and settings.get_bool("display.progress", is_tty),
        show_apparent_size=apparent or settings.get_bool("display.apparent_size", False),
    )


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("--no-color", is_flag=True, help="Do not use colored output")
@click.option("--no-progress", is_flag=True, help="Do not show progress while scanning")
@click.option("-a", "--show-apparent-size", is_flag=True, help="Show apparent size instead of disk usage")
@click.option(
    "-i",
    "--ignore-dirs",
    default=None,
    help="Comma-separated absolute paths to skip (default: /proc,/dev,/sys,/run)",
)
@click.option("-d", "--show-disks", is_flag=True, help="Show mounted disks instead of scanning")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file to read",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(
    path: str,
    no_color: bool,
    no_progress: bool,
    show_apparent_size: bool,
    ignore_dirs: str | None,
    show_disks: bool,
    config_path: Path | None,
    verbose: int,
) -> None:
    """duscan — show what takes up space in PATH (default: current directory)."""
    _setup_logging(verbose)
    settings = Settings(config_path)
    config = _build_config(settings, no_color, no_progress, show_apparent_size)
    ui = StdoutUI(click.get_text_stream("stdout"), config)

    if show_disks:
        try:
            ui.list_devices(MountsDevicesInfoGetter())
        except DeviceInfoError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        return

    if ignore_dirs is not None:
        ui.set_ignore_dir_paths(p.strip() for p in ignore_dirs.split(","))
    else:
        ui.set_ignore_dir_paths(settings.ignore_dirs())

    try:
        ui.analyze_path(path)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
