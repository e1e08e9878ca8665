"""Shared pytest fixtures for the crun test suite."""

from __future__ import annotations

import pytest

from crun.resolver import resolve
from tests.helpers import FakeToolchain


@pytest.fixture
def needs_cc():
    """Skip test if no C compiler is available."""
    if not resolve("", "probe.c"):
        pytest.skip("no C compiler available")


@pytest.fixture
def toolchain(tmp_path, monkeypatch):
    """An empty PATH directory to install fake compilers into."""
    return FakeToolchain(tmp_path / "bin", monkeypatch)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the home directory at a temp dir."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir
