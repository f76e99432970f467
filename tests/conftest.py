"""Shared fixtures: every test runs with an empty HOME and a wide terminal."""

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so no user planner.yaml or templates leak in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    # Rich tables truncate ids at the default 80 columns
    monkeypatch.setenv("COLUMNS", "200")
    return home
