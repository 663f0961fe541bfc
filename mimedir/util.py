"""Utility methods used by multiple modules.

Raw values are handled as `str`. Bytes read from a file that are not valid
UTF-8 are expected to be decoded with the `surrogateescape` error handler, so
that the original bytes survive as lone surrogates and can be detected and
repaired during validation, or written back out unchanged.
"""

from __future__ import annotations

import re

__all__ = [
    "decode_raw",
    "encode_raw",
    "is_utf8",
    "convert_to_utf8",
    "find_control_character",
    "qname",
]

_RE_CONTROL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
# Surrogates outside the range used by the surrogateescape error handler
_RE_LONE_SURROGATES = re.compile("[\ud800-\udc7f\udd00-\udfff]")
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def decode_raw(value: bytes) -> str:
    """Decode raw bytes, preserving any bytes that are not valid UTF-8."""
    return value.decode(_ENCODING, _ERRORS)


def encode_raw(value: str) -> bytes:
    """Encode a raw value back into the bytes it was decoded from.

    Will raise a ValueError if the value contains a surrogate that did not come
    from an undecodable byte, since it has no byte representation.
    """
    try:
        return value.encode(_ENCODING, _ERRORS)
    except UnicodeEncodeError as err:
        raise ValueError(
            f"Value contains a surrogate with no byte representation: {value!r}"
        ) from err


def find_control_character(value: str) -> str | None:
    """Return the first control character in the value, if any."""
    if match := _RE_CONTROL_CHARS.search(value):
        return match.group(0)
    return None


def is_utf8(value: str) -> bool:
    """Return true if the value is valid UTF-8 without control characters."""
    if find_control_character(value) is not None:
        return False
    try:
        value.encode(_ENCODING)
    except UnicodeEncodeError:
        return False
    return True


def convert_to_utf8(value: str) -> str:
    """Coerce a value into valid UTF-8 on a best-effort basis.

    Content that is not UTF-8 is assumed to be ISO-8859-1, which is what most
    legacy vCard producers emit. Control characters and surrogates that do not
    stand for an undecodable byte are removed.
    """
    raw = encode_raw(_RE_LONE_SURROGATES.sub("", value))
    try:
        text = raw.decode(_ENCODING)
    except UnicodeDecodeError:
        text = raw.decode("iso-8859-1")
    return _RE_CONTROL_CHARS.sub("", text)


def qname(namespace: str | None, name: str) -> str:
    """Return an element tag, qualified with the namespace when specified."""
    if namespace:
        return f"{{{namespace}}}{name}"
    return name
