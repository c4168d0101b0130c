"""Tests for the ignore set."""

from __future__ import annotations

import os

from duscan.core.ignore import IgnoreSet


class TestIgnoreSet:
    def test_membership(self):
        ignore = IgnoreSet(["/proc", "/sys"])
        assert ignore.should_ignore("/proc")
        assert "/sys" in ignore
        assert not ignore.should_ignore("/home")

    def test_no_prefix_matching(self):
        ignore = IgnoreSet(["/proc"])
        assert not ignore("/proc/1")
        assert not ignore("/processes")

    def test_paths_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ignore = IgnoreSet(["build"])
        assert ignore(os.path.join(os.getcwd(), "build"))

    def test_trailing_slash_normalised(self):
        assert IgnoreSet(["/var/cache/"])("/var/cache")

    def test_from_csv(self):
        ignore = IgnoreSet.from_csv("/proc, /dev,,/sys")
        assert list(ignore) == ["/dev", "/proc", "/sys"]
        assert len(ignore) == 3

    def test_empty(self):
        ignore = IgnoreSet()
        assert len(ignore) == 0
        assert not ignore("/")
