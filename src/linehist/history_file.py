"""A History bound to its backing file, for use by a line editor."""

from __future__ import annotations

import logging
from pathlib import Path

from linehist import persistence
from linehist.config.schema import HistoryConfig
from linehist.history import History

logger = logging.getLogger(__name__)


class HistoryFile:
    """Owns one History and the file it is loaded from and saved to.

    ``load`` and ``save`` raise on I/O errors. ``try_load`` and ``try_save``
    log a warning and return False instead, so a host application keeps
    running when its history cannot be read or written.
    """

    def __init__(self, path: Path | str | None = None, config: HistoryConfig | None = None) -> None:
        self.config = config or HistoryConfig()
        self.path = Path(path).expanduser() if path is not None else self.config.resolved_path
        self.history = History(
            max_size=self.config.max_size,
            max_entries=self.config.max_entries,
        )

    def add(self, entry: str) -> None:
        self.history.add(entry, skip_empty=self.config.skip_empty, skip_dup=self.config.skip_dup)

    def contents(self) -> list[str]:
        return self.history.contents()

    def load(self) -> None:
        persistence.load(self.history, self.path, self.config.load_options())

    def save(self, **overrides: object) -> None:
        persistence.save(self.history, self.path, self.config.save_options(**overrides))

    def try_load(self) -> bool:
        try:
            self.load()
        except OSError as e:
            logger.warning("History could not be loaded from %s: %s", self.path, e)
            return False
        return True

    def try_save(self) -> bool:
        try:
            self.save()
        except OSError as e:
            logger.warning("History could not be saved to %s: %s", self.path, e)
            return False
        return True
