"""Escaping of history entries into single lines of the history file.

An entry may contain newlines and backslashes. On disk each entry is one
line: ``\\n`` is written as backslash-n and ``\\`` as a double backslash.
"""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r"\\(n|\\)?")


class InvalidEntryError(ValueError):
    """Raised when a history line is not valid UTF-8."""


def entry_size(text: str) -> int:
    """Return the number of bytes ``text`` occupies in the history file.

    This is the UTF-8 length of the escaped form plus the terminating newline.
    Raises InvalidEntryError if ``text`` cannot be written as UTF-8 (lone
    surrogates).
    """
    try:
        raw = len(text.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise InvalidEntryError(str(e)) from e
    return raw + text.count("\n") + text.count("\\") + 1


def escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _unescape_match(match: re.Match[str]) -> str:
    code = match.group(1)
    if code == "n":
        return "\n"
    # Double backslash, unknown escape or trailing backslash
    return "\\"


def unescape(line: str | bytes) -> tuple[str, int]:
    """Decode one history line.

    Returns the entry text and its encoded size. Unknown escapes and a
    trailing backslash are kept as a literal backslash. Raises
    InvalidEntryError if ``line`` is bytes that are not valid UTF-8.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEntryError(str(e)) from e
    text = _ESCAPE_RE.sub(_unescape_match, line)
    return text, entry_size(text)


def is_empty(text: str) -> bool:
    """Check if text is empty or only whitespace."""
    return not text or text.isspace()
