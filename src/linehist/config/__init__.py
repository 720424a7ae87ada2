"""Configuration system for linehist."""

from linehist.config.loader import load_config
from linehist.config.schema import HistoryConfig

__all__ = ["load_config", "HistoryConfig"]
