"""Advisory whole-file locks for coordinating history writers."""

from __future__ import annotations

import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

_MODES = {os.O_RDONLY: "rb", os.O_WRONLY: "wb", os.O_RDWR: "r+b"}


@contextmanager
def locked(fd: int, shared: bool = False) -> Iterator[None]:
    """Hold a POSIX advisory lock on the whole file behind ``fd``.

    Shared locks are for readers, exclusive locks for writers. Blocks until
    the lock is granted and always releases it on exit.
    """
    fcntl.lockf(fd, fcntl.LOCK_SH if shared else fcntl.LOCK_EX)
    logger.debug("Lock acquired on fd %d (%s)", fd, "shared" if shared else "exclusive")
    try:
        yield
    finally:
        fcntl.lockf(fd, fcntl.LOCK_UN)
        logger.debug("Lock released on fd %d", fd)


@contextmanager
def open_locked(
    path: Path | str,
    flags: int,
    perm: int = 0o666,
    shared: bool = False,
) -> Iterator[BinaryIO]:
    """Open ``path`` with ``os.open`` flags and lock it for the block.

    Yields a binary file object. Pending writes are flushed before the lock
    is released, and the descriptor is closed on every exit path.
    """
    fd = os.open(path, flags, perm)
    try:
        with locked(fd, shared=shared):
            mode = _MODES[flags & os.O_ACCMODE]
            f = os.fdopen(fd, mode, closefd=False)
            try:
                yield f
            finally:
                f.close()
    finally:
        os.close(fd)
