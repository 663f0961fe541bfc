"""Folding and unfolding of mimedir content lines.

A content line is a single logical line such as `SUMMARY:Meeting`. Lines
longer than 75 octets are split into multiple physical lines, each
continuation line starting with a single space:

  DESCRIPTION:This is a lo
   ng description

Folding counts bytes of the UTF-8 encoded line, not characters, and never
splits a multi-byte character across two physical lines.
"""

from __future__ import annotations

import re
from collections.abc import Generator

from .util import decode_raw, encode_raw

__all__ = [
    "fold",
    "unfold",
    "unfolded_lines",
]

CRLF = "\r\n"
FOLD = r"\r?\n[ \t]"
FOLD_LEN = 75
FOLD_INDENT = " "

FOLD_RE = re.compile(FOLD, flags=re.MULTILINE)
LINES_RE = re.compile(r"\r?\n")

_LINE_BREAK = (CRLF + FOLD_INDENT).encode()


def _is_continuation(byte: int) -> bool:
    """Return true if the byte is in the middle of a UTF-8 sequence."""
    return byte & 0xC0 == 0x80


def fold(contentline: str) -> str:
    """Fold an unfolded content line into CRLF terminated physical lines."""
    data = encode_raw(contentline)
    size = len(data)
    lines: list[bytes] = []
    pos = 0
    width = FOLD_LEN
    while pos < size:
        end = min(pos + width, size)
        brk = end
        while pos < brk < size and _is_continuation(data[brk]):
            brk -= 1
        if brk == pos:
            # No character boundary within the window, e.g. for malformed input
            brk = end
        lines.append(data[pos:brk])
        pos = brk
        width = FOLD_LEN - len(FOLD_INDENT)
    if not lines:
        return ""
    return decode_raw(_LINE_BREAK.join(lines)) + CRLF


def unfold(content: str) -> str:
    """Join folded physical lines back into logical lines."""
    return FOLD_RE.sub("", content)


def unfolded_lines(content: str) -> Generator[str, None, None]:
    """Read content and yield each unfolded logical line."""
    for line in LINES_RE.split(unfold(content)):
        if line:
            yield line
