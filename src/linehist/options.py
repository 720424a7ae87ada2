"""Per-call options for loading and saving a history file."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoadOptions(BaseModel):
    skip_empty: bool = True
    skip_dup: bool = True


class SaveOptions(BaseModel):
    """Options for ``persistence.save``.

    ``max_size`` and ``max_entries`` override the history's own limits for
    the saved file when set.
    """

    max_size: int | None = Field(default=None, ge=0)
    max_entries: int | None = Field(default=None, ge=0)
    skip_empty: bool = True
    skip_dup: bool = True
    append: bool = True
    perm: int = 0o666
