"""linehist - bounded, persistent, shareable line-editor history."""

from linehist.codec import InvalidEntryError, entry_size, escape, unescape
from linehist.history import Entry, History
from linehist.history_file import HistoryFile
from linehist.options import LoadOptions, SaveOptions
from linehist.persistence import load, load_async, save, save_async

__version__ = "0.1.0"

__all__ = [
    "Entry",
    "History",
    "HistoryFile",
    "InvalidEntryError",
    "LoadOptions",
    "SaveOptions",
    "entry_size",
    "escape",
    "load",
    "load_async",
    "save",
    "save_async",
    "unescape",
]
