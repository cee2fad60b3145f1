"""Shared pytest fixtures for mastotext tests."""

import sys
from pathlib import Path

import pytest

# Add the package to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point XDG config at an empty temp dir so user config never leaks in."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("MASTOTEXT_EMOJI_FILE", raising=False)
    return config_home
