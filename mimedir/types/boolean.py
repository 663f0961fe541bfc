"""Library for encoding BOOLEAN values."""

from typing import Any

from ..property import Property
from .data_types import PROPERTY_TYPE


def _format_boolean(value: Any) -> str:
    return "TRUE" if value else "FALSE"


@PROPERTY_TYPE.register("BOOLEAN")
class BooleanProperty(Property):
    """A property with one or more boolean values."""

    delimiter = ","

    def set_raw_mimedir_value(self, value: str) -> None:
        """Parse a mimedir boolean, anything other than TRUE is false."""
        parts = [part.upper() == "TRUE" for part in value.split(self.delimiter)]
        self.set_value(parts[0] if len(parts) == 1 else parts)

    def get_raw_mimedir_value(self) -> str:
        """Serialize the booleans as a mimedir value."""
        if not (parts := self.get_parts()):
            return _format_boolean(False)
        return self.delimiter.join(_format_boolean(part) for part in parts)

    def _xml_text(self, value: Any) -> str:
        return "true" if value else "false"
