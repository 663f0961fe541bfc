"""Library for encoding BINARY values.

Binary values are base64 encoded in the mimedir, jCard and xCard formats,
and are always a single value.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from ..property import Property
from .data_types import PROPERTY_TYPE

__all__ = [
    "BinaryProperty",
]


@PROPERTY_TYPE.register("BINARY")
class BinaryProperty(Property):
    """A property with an inline binary value."""

    delimiter = ""

    def set_value(self, value: Any) -> None:
        """Set the value from bytes, or a list with exactly one item."""
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise ValueError(
                    "The value must either be bytes or a list with only one child"
                )
            value = value[0]
        if isinstance(value, str):
            value = value.encode()
        super().set_value(value)

    def set_parts(self, parts: list[Any]) -> None:
        """Set the value from a list with exactly one item."""
        self.set_value(parts)

    def set_raw_mimedir_value(self, value: str) -> None:
        """Set the value from a base64 encoded string."""
        try:
            decoded = base64.b64decode(value)
        except binascii.Error as err:
            raise ValueError(f"Unable to decode base64 value: {value}") from err
        self.set_value(decoded)

    def get_raw_mimedir_value(self) -> str:
        """Return the base64 encoded value."""
        if (value := self.get_value()) is None:
            return ""
        return base64.b64encode(value).decode("ascii")

    def get_json_value(self) -> list[Any]:
        """Return the base64 encoded value."""
        return [self.get_raw_mimedir_value()]

    def set_json_value(self, value: list[Any]) -> None:
        """Set the value from a list with a single base64 encoded string."""
        if len(value) != 1:
            raise ValueError("A binary value must contain exactly one item")
        self.set_raw_mimedir_value(value[0])
