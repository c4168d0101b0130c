"""Shared test fixtures."""

from __future__ import annotations

import io
import os
import time

import pytest

from duscan.core.analyzer import Analyzer
from duscan.models.entry import Entry
from duscan.models.progress import ProgressSnapshot


class FakeAnalyzer(Analyzer):
    """Analyzer that returns a prebuilt tree without touching the filesystem."""

    def __init__(
        self,
        children: tuple[Entry, ...] = (),
        snapshots: tuple[ProgressSnapshot, ...] = (),
        delay: float = 0,
        fail: bool = False,
    ) -> None:
        super().__init__()
        self._children = children
        self._snapshots = snapshots
        self._delay = delay
        self._fail = fail
        self.calls: list[str] = []

    def _analyze(self, path, ignore):
        self.calls.append(path)
        for snapshot in self._snapshots:
            self.signals.publish(snapshot)
            if self._delay:
                time.sleep(self._delay)
        if self._fail:
            raise RuntimeError("analyzer crashed")
        kids = tuple(c for c in self._children if not ignore(os.path.join(path, c.name)))
        return Entry(
            name=os.path.basename(path) or path,
            size=sum(c.size for c in kids),
            usage=sum(c.usage for c in kids),
            is_dir=True,
            children=kids,
            item_count=1 + sum(c.item_count for c in kids),
        )


@pytest.fixture
def make_analyzer():
    """Factory for FakeAnalyzer instances."""
    return FakeAnalyzer


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp directory and return the settings file path."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "duscan" / "settings.json"
