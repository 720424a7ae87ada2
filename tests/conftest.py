"""Shared test fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    """Path of a history file that does not exist yet."""
    return tmp_path / "history"


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    """Create a minimal valid config YAML file."""
    config = tmp_path / "linehist.yaml"
    config.write_text(
        f"""\
path: "{tmp_path / 'configured_history'}"
max_entries: 3
max_size: 1000
log_level: "debug"
"""
    )
    return config


@pytest.fixture
def empty_config_yaml(tmp_path: Path) -> Path:
    """Create an empty config YAML file."""
    config = tmp_path / "linehist.yaml"
    config.write_text("{}\n")
    return config
