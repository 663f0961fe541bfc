"""Library for diagnostics or debugging information about documents."""

from __future__ import annotations

from collections.abc import Generator
import itertools

from .contentlines import unfolded_lines

__all__ = [
    "redact",
]


PROPERTY_ALLOWLIST = {
    "BEGIN",
    "END",
    "VERSION",
    "PRODID",
    "KIND",
    "REV",
    "DTSTAMP",
    "CREATED",
    "LAST-MODIFIED",
    "DTSTART",
    "DTEND",
    "RRULE",
}
REDACT = "***"
MAX_CONTENTLINES = 5000


def property_sep(contentline: str) -> int:
    """Return the index of the end of the property name in the string."""
    colon = contentline.find(":")
    semi = contentline.find(";")
    if colon > -1 and semi > -1:
        return min(colon, semi)
    if colon > -1:
        return colon
    return semi


def redact_contentline(contentline: str, property_allowlist: set[str]) -> str:
    """Return a redacted version of a content line."""
    if (i := property_sep(contentline)) and i > -1:
        prefix = contentline[0:i]
        # Strip the vCard group, e.g. item1.TEL
        name = prefix.rsplit(".", 1)[-1]
        if name.upper() in property_allowlist:
            return contentline
        return f"{prefix}:{REDACT}"
    return REDACT


def redact(
    content: str,
    max_contentlines: int = MAX_CONTENTLINES,
    property_allowlist: set[str] | None = None,
) -> Generator[str, None, None]:
    """Generate redacted document contents one unfolded line at a time."""
    for contentline in itertools.islice(unfolded_lines(content), max_contentlines):
        yield redact_contentline(contentline, property_allowlist or PROPERTY_ALLOWLIST)
