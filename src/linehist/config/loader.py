"""Configuration loader for linehist."""

from __future__ import annotations

from pathlib import Path

import yaml

from linehist.config.schema import HistoryConfig


def load_config(path: Path | str | None = None) -> HistoryConfig:
    """Load history file settings (path, limits, filters) from a YAML file.

    The top-level mapping holds ``HistoryConfig`` fields directly. If path is
    None, the file doesn't exist or is not a regular file, returns defaults.
    Raises ValueError for malformed YAML or out-of-range limits.
    """
    if path is None:
        return HistoryConfig()

    path = Path(path).expanduser().resolve()
    if not path.is_file():
        return HistoryConfig()

    text = path.read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path}: {e}") from e

    if data is None or not isinstance(data, dict):
        return HistoryConfig()

    return HistoryConfig(**data)
