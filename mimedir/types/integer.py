"""Library for encoding INTEGER values."""

from __future__ import annotations

import re
from typing import Any

from ..property import Property
from .data_types import PROPERTY_TYPE

_RE_INTEGER = re.compile(r"\s*([+-]?\d+)")


def parse_integer(value: Any) -> int:
    """Parse the leading integer of a value, or zero if there is none."""
    if isinstance(value, int):
        return value
    if match := _RE_INTEGER.match(str(value)):
        return int(match.group(1))
    return 0


@PROPERTY_TYPE.register("INTEGER")
class IntegerProperty(Property):
    """A property with one or more integer values."""

    delimiter = ","

    def set_raw_mimedir_value(self, value: str) -> None:
        """Parse a mimedir integer value."""
        parts = [parse_integer(part) for part in value.split(self.delimiter)]
        self.set_value(parts[0] if len(parts) == 1 else parts)

    def get_raw_mimedir_value(self) -> str:
        """Serialize the integers as a mimedir value."""
        return self.delimiter.join(str(part) for part in self.get_parts())

    def get_json_value(self) -> list[Any]:
        """Return the values as integers."""
        return [parse_integer(part) for part in self.get_parts()]
