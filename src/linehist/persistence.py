"""Loading and saving a History to a file shared between processes.

The file holds one escaped entry per line, oldest first. Readers take a
shared lock for the whole read; ``save`` takes an exclusive lock for its
whole read-merge-write sequence, so concurrent savers are totally ordered
and each one merges what the previous ones committed.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from linehist.codec import InvalidEntryError, escape, unescape
from linehist.file_lock import open_locked
from linehist.history import History
from linehist.options import LoadOptions, SaveOptions

logger = logging.getLogger(__name__)

CorruptLineHandler = Callable[[int, str], None]


def _strip_newline(raw: bytes) -> bytes:
    return raw[:-1] if raw.endswith(b"\n") else raw


def _log_corrupt_line(path: Path | str, line_number: int, message: str) -> None:
    logger.error("File %r, at line %d: %s", str(path), line_number, message)


def load(
    history: History,
    path: Path | str,
    options: LoadOptions | None = None,
    *,
    on_corrupt_line: CorruptLineHandler | None = None,
    **kwargs: Any,
) -> None:
    """Add the entries of the history file at ``path`` to ``history``.

    Loaded entries count as old. A missing file loads nothing. Lines that are
    not valid UTF-8 are reported to ``on_corrupt_line(line_number, message)``
    (by default logged) and skipped. Raises OSError on other open or lock
    failures.
    """
    opts = options or LoadOptions(**kwargs)
    # In case nothing gets loaded
    history.old_count = history.length
    if history.max_entries == 0 or history.max_size == 0:
        return

    if on_corrupt_line is None:
        on_corrupt_line = functools.partial(_log_corrupt_line, path)

    loaded = 0
    try:
        with open_locked(path, os.O_RDONLY, shared=True) as f:
            for line_number, raw in enumerate(f, start=1):
                try:
                    text, size = unescape(_strip_newline(raw))
                except InvalidEntryError as e:
                    on_corrupt_line(line_number, str(e))
                    continue
                if history.accepts(text, opts.skip_empty, opts.skip_dup):
                    history.append_sized(text, size)
                    history.old_count = history.length
                    loaded += 1
    except FileNotFoundError:
        logger.debug("No history file at %s", path)
        return
    logger.debug("Loaded %d entries from %s", loaded, path)


def save(
    history: History,
    path: Path | str,
    options: SaveOptions | None = None,
    **kwargs: Any,
) -> None:
    """Merge the new entries of ``history`` into the history file at ``path``.

    With ``append`` set, entries written by other processes since the last
    load are kept: the file is read back, this session's new entries are
    added after them, and the result is trimmed to the limits. If nothing
    already on disk had to go, only the new lines are appended; otherwise
    the file is rewritten. After a successful save every entry of
    ``history`` counts as old. Raises OSError on open, lock or write
    failures.
    """
    opts = options or SaveOptions(**kwargs)
    max_size = history.max_size if opts.max_size is None else opts.max_size
    max_entries = history.max_entries if opts.max_entries is None else opts.max_entries
    # Holds escaped lines, compared and stored as they are on disk
    history_save = History(max_size=max_size, max_entries=max_entries)

    if max_size == 0 or max_entries == 0:
        os.close(os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, opts.perm))
        logger.debug("Emptied history file %s", path)
        return

    with open_locked(path, os.O_RDWR | os.O_CREAT, opts.perm) as f:
        disk_count = 0
        missing_newline = False
        if opts.append:
            for raw in f:
                line = _strip_newline(raw)
                missing_newline = not raw.endswith(b"\n")
                disk_count += 1
                data = line.decode("utf-8", "surrogateescape")
                if history_save.accepts(data, opts.skip_empty, opts.skip_dup):
                    history_save.append_sized(data, len(line) + 1)
            history_save.old_count = history_save.length

        for entry in history.new_entries():
            line = escape(entry.text)
            if history_save.accepts(line, opts.skip_empty, opts.skip_dup):
                history_save.append_sized(line, entry.size)

        appending = opts.append and history_save.old_count == disk_count
        lines = history_save.contents()[disk_count if appending else 0 :]
        # Encode before touching the file so a failure leaves it intact
        payload = b"".join(line.encode("utf-8", "surrogateescape") + b"\n" for line in lines)

        if appending:
            # Everything on disk is kept: write the new lines at the end.
            f.seek(0, os.SEEK_END)
            if missing_newline and payload:
                payload = b"\n" + payload
        else:
            f.seek(0)
            f.truncate()
        f.write(payload)
        f.flush()

    logger.debug(
        "Saved %d entries to %s (%s)",
        len(lines),
        path,
        "appended" if appending else "rewritten",
    )
    history.old_count = history.length


async def load_async(
    history: History,
    path: Path | str,
    options: LoadOptions | None = None,
    **kwargs: Any,
) -> None:
    """Run ``load`` in the event loop's default executor."""
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, functools.partial(load, history, path, options, **kwargs))


async def save_async(
    history: History,
    path: Path | str,
    options: SaveOptions | None = None,
    **kwargs: Any,
) -> None:
    """Run ``save`` in the event loop's default executor."""
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, functools.partial(save, history, path, options, **kwargs))
