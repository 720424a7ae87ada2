"""Pydantic v2 models for linehist configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from linehist.options import LoadOptions, SaveOptions


class HistoryConfig(BaseModel):
    """Root configuration model for a history file."""

    path: str = "~/.linehist_history"
    max_size: int | None = Field(default=None, ge=0)
    max_entries: int | None = Field(default=None, ge=0)
    skip_empty: bool = True
    skip_dup: bool = True
    append: bool = True
    perm: int = 0o666
    log_level: str = "warning"

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()

    def load_options(self) -> LoadOptions:
        return LoadOptions(skip_empty=self.skip_empty, skip_dup=self.skip_dup)

    def save_options(self, **overrides: object) -> SaveOptions:
        """Build save options from this config. Limits come from the history."""
        fields = {
            "skip_empty": self.skip_empty,
            "skip_dup": self.skip_dup,
            "append": self.append,
            "perm": self.perm,
        }
        fields.update(overrides)
        return SaveOptions(**fields)
