"""Library for encoding TEXT values.

Text values escape backslashes, semicolons, commas and newlines. A property
may hold multiple text values separated by commas (e.g. CATEGORIES), or in
the case of structured properties such as N and ADR, separated by
semicolons where each component may itself hold comma separated values.
"""

from __future__ import annotations

import logging
from typing import Any

from ..node import Finding, ValidateOption, repair_level
from ..property import Property
from .data_types import PROPERTY_TYPE

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "TextProperty",
    "escape_value",
    "unescape_value",
]

ESCAPE_CHAR = str.maketrans(
    {"\\": "\\\\", ";": "\\;", ",": "\\,", "\n": "\\n", "\r": ""}
)
UNESCAPE_CHAR = {"\\": "\\", ";": ";", ",": ",", "n": "\n", "N": "\n"}

# Properties where the values are separated by semicolons instead of commas.
STRUCTURED_VALUES = {
    # vCard
    "N",
    "ADR",
    "ORG",
    "GENDER",
    "CLIENTPIDMAP",
    # iCalendar
    "REQUEST-STATUS",
}

# Some text values have a minimum number of components.
MINIMUM_PROPERTY_VALUES = {
    "N": 5,
    "ADR": 7,
}


def escape_value(value: str) -> str:
    """Escape a single text value."""
    return value.translate(ESCAPE_CHAR)


def unescape_value(
    value: str, delimiter: str, sub_delimiter: str | None = None
) -> list[str | list[str]]:
    """Split a raw text value on unescaped delimiters and unescape each part.

    When a sub delimiter is given, a part containing an unescaped sub delimiter
    is further split into a list. Unrecognized escape sequences are kept as-is.
    """
    parts: list[str | list[str]] = []
    items: list[str] = []
    current: list[str] = []
    chars = iter(value)
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            if (unescaped := UNESCAPE_CHAR.get(escaped)) is not None:
                current.append(unescaped)
            else:
                current.append(char + escaped)
        elif char == delimiter:
            items.append("".join(current))
            parts.append(items[0] if len(items) == 1 else items)
            items = []
            current = []
        elif char == sub_delimiter:
            items.append("".join(current))
            current = []
        else:
            current.append(char)
    items.append("".join(current))
    parts.append(items[0] if len(items) == 1 else items)
    return parts


def _encode_component(item: Any) -> str:
    """Escape a component, joining multiple values with a comma."""
    sub_items = item if isinstance(item, list) else [item]
    return ",".join(
        "" if sub_item is None else escape_value(str(sub_item)) for sub_item in sub_items
    )


@PROPERTY_TYPE.register("TEXT")
class TextProperty(Property):
    """A property with one or more text values."""

    @property  # type: ignore[override]
    def delimiter(self) -> str:
        """Return the value separator, a semicolon for structured values."""
        return ";" if self.name in STRUCTURED_VALUES else ","

    def set_raw_mimedir_value(self, value: str) -> None:
        """Set the value from an escaped text value."""
        sub_delimiter = "," if self.name in STRUCTURED_VALUES else None
        parts = unescape_value(value, self.delimiter, sub_delimiter)
        if len(parts) == 1 and not isinstance(parts[0], list):
            self.set_value(parts[0])
        else:
            self.set_parts(parts)

    def get_raw_mimedir_value(self) -> str:
        """Return the escaped text value."""
        parts = self.get_parts()
        if (minimum := MINIMUM_PROPERTY_VALUES.get(self.name)) and len(parts) < minimum:
            parts += [""] * (minimum - len(parts))

        return self.delimiter.join(_encode_component(item) for item in parts)

    def _xml_text(self, value: Any) -> str:
        """Return a component, with multiple values escaped and joined by a comma."""
        if isinstance(value, list):
            return _encode_component(value)
        return "" if value is None else str(value)

    def get_json_value(self) -> list[Any]:
        """Return the jCard/jCal value, as a single list for structured values."""
        if self.name in STRUCTURED_VALUES:
            return [self.get_parts()]
        return self.get_parts()

    def set_json_value(self, value: list[Any]) -> None:
        """Set the jCard/jCal value, unwrapping structured values."""
        if self.name in STRUCTURED_VALUES and len(value) == 1:
            if isinstance(value[0], list):
                self.set_parts(value[0])
                return
        super().set_json_value(value)

    def validate(self, options: int = ValidateOption.NONE) -> list[Finding]:
        """Validate the property, including the number of structured components."""
        findings = super().validate(options)
        if not (minimum := MINIMUM_PROPERTY_VALUES.get(self.name)):
            return findings

        parts = self.get_parts()
        if len(parts) < minimum:
            findings.append(
                Finding(
                    repair_level(options),
                    f"The {self.name} property must have at least {minimum} values. "
                    f"It only has {len(parts)}",
                    self,
                )
            )
            if options & ValidateOption.REPAIR:
                _LOGGER.debug("Padding %s to %s values", self.name, minimum)
                self.set_parts(parts + [""] * (minimum - len(parts)))
        return findings
