"""Library for encoding URI values."""

from __future__ import annotations

import re
from typing import Any

from ..property import Property
from .data_types import PROPERTY_TYPE

# Some producers escape characters that do not need escaping in a URI value.
_RE_ESCAPED = re.compile(r"\\([\\,;:])")


@PROPERTY_TYPE.register("URI")
class UriProperty(Property):
    """A property with a uniform resource identifier value."""

    delimiter = ","

    def set_raw_mimedir_value(self, value: str) -> None:
        """Set the value, removing unnecessary escaping."""
        self.set_value(_RE_ESCAPED.sub(r"\1", value))

    def get_raw_mimedir_value(self) -> str:
        """Return the uri value."""
        return self.delimiter.join(str(part) for part in self.get_parts())


@PROPERTY_TYPE.register("UNKNOWN")
class UnknownProperty(UriProperty):
    """A property with a value of a type that is not known.

    The raw value is preserved exactly as it was read.
    """

    delimiter = ";"

    def set_raw_mimedir_value(self, value: str) -> None:
        """Set the value unchanged."""
        self.set_value(value)

    def get_json_value(self) -> list[Any]:
        """Return the raw value as a single string."""
        return [self.get_raw_mimedir_value()]
