"""Bounded in-memory history of line-editor entries."""

from __future__ import annotations

import logging
import sys
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from linehist.codec import entry_size, is_empty

logger = logging.getLogger(__name__)

UNBOUNDED = sys.maxsize


@dataclass(frozen=True)
class Entry:
    text: str
    size: int


def _size_ok(size1: int, size2: int, limit: int) -> bool:
    """Check that ``size1 + size2`` stays within ``[0, limit]``."""
    total = size1 + size2
    return 0 <= total <= limit


def _check_limit(value: int, what: str) -> int:
    if value < 0:
        raise ValueError(f"negative maximum {what}")
    return value


class History:
    """History of entries bounded by encoded size and entry count.

    Entries are kept oldest to newest. ``size`` is the sum of the encoded
    sizes of all entries (see ``codec.entry_size``); it never exceeds
    ``max_size`` and ``length`` never exceeds ``max_entries``.

    ``old_count`` is the number of entries, counted from the oldest one,
    that are already in the history file as of the last load or save.
    """

    def __init__(
        self,
        initial: Iterable[str] = (),
        max_size: int | None = None,
        max_entries: int | None = None,
    ) -> None:
        self._max_size = UNBOUNDED if max_size is None else _check_limit(max_size, "size")
        self._max_entries = (
            UNBOUNDED if max_entries is None else _check_limit(max_entries, "number of entries")
        )
        self._entries: deque[Entry] = deque()
        self._full_size = 0
        self._old_count = 0
        # Oldest to newest; None when it must be rebuilt
        self._cache: list[str] | None = None

        # Keep the most recent suffix of the backlog that fits.
        kept: list[Entry] = []
        size = 0
        for text in reversed(list(initial)):
            esize = entry_size(text)
            if len(kept) + 1 > self._max_entries or not _size_ok(size, esize, self._max_size):
                break
            kept.append(Entry(text, esize))
            size += esize
        self._entries.extend(reversed(kept))
        self._full_size = size
        self._old_count = len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"History(length={self.length}, size={self.size}, old_count={self.old_count}, "
            f"max_entries={self.max_entries}, max_size={self.max_size})"
        )

    # -- Accessors ---------------------------------------------------------

    @property
    def size(self) -> int:
        return self._full_size

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def old_count(self) -> int:
        return self._old_count

    @old_count.setter
    def old_count(self, n: int) -> None:
        if n < 0:
            raise ValueError("negative old count")
        if n > self.length:
            raise ValueError("old count greater than the length of the history")
        self._old_count = n

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, size: int) -> None:
        _check_limit(size, "size")
        while size < self._full_size:
            self._drop_oldest()
        self._max_size = size

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @max_entries.setter
    def max_entries(self, n: int) -> None:
        _check_limit(n, "number of entries")
        while n < self.length:
            self._drop_oldest()
        self._max_entries = n

    def set_old_count(self, n: int) -> None:
        self.old_count = n

    def set_max_size(self, size: int) -> None:
        self.max_size = size

    def set_max_entries(self, n: int) -> None:
        self.max_entries = n

    # -- Mutation ----------------------------------------------------------

    def _drop_oldest(self) -> None:
        """Evict the oldest entry. The history must not be empty."""
        self._cache = None
        entry = self._entries.popleft()
        self._full_size -= entry.size
        if self._old_count > 0:
            self._old_count -= 1

    def append_sized(self, text: str, size: int) -> None:
        """Add ``text`` as the newest entry, evicting old entries to make room.

        ``size`` must be the encoded size of ``text``, as returned by
        ``codec.unescape`` or ``codec.entry_size``. Entries that could never
        fit are dropped.
        """
        if self._max_entries == 0:
            return
        if size > self._max_size:
            logger.debug("Dropping entry of %d bytes, larger than max_size %d", size, self._max_size)
            return
        if self.length >= self._max_entries:
            self._drop_oldest()
        # size <= max_size, so there is something left to drop while this fails
        while not _size_ok(self._full_size, size, self._max_size):
            self._drop_oldest()
        self._entries.append(Entry(text, size))
        self._full_size += size
        if self._cache is not None:
            self._cache.append(text)

    def accepts(self, text: str, skip_empty: bool = True, skip_dup: bool = True) -> bool:
        """Return True if ``text`` would pass the empty and duplicate filters."""
        if self._max_entries == 0 or self._max_size == 0:
            return False
        if skip_empty and is_empty(text):
            return False
        if skip_dup and self.is_dup(text):
            return False
        return True

    def is_dup(self, text: str) -> bool:
        """Check if ``text`` equals the most recent entry."""
        return bool(self._entries) and self._entries[-1].text == text

    def add(self, entry: str, skip_empty: bool = True, skip_dup: bool = True) -> None:
        """Add a new entry as the most recent one.

        Empty or whitespace-only entries are skipped when ``skip_empty`` is
        set, and an entry equal to the most recent one when ``skip_dup`` is
        set. The oldest entries are evicted to respect the limits. Raises
        InvalidEntryError for text that cannot be stored as UTF-8.
        """
        if self.accepts(entry, skip_empty, skip_dup):
            self.append_sized(entry, entry_size(entry))

    # -- Reading -----------------------------------------------------------

    def contents(self) -> list[str]:
        """Return all entries, oldest first.

        The listing is memoized until the next eviction; each call returns a
        new list the caller owns.
        """
        if self._cache is None:
            self._cache = [entry.text for entry in self._entries]
        return list(self._cache)

    def new_entries(self) -> list[Entry]:
        """Entries added since the last load or save, oldest first."""
        return list(self._entries)[self._old_count :]
