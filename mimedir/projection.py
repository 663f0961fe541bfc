"""Library for reading and writing the jCard/jCal property tuple.

A property is encoded in jCard (rfc7095) and jCal (rfc7265) as an array:

  ["tel", {"type": ["work", "voice"], "group": "item1"}, "uri", "tel:+1-555-0100"]

The first three items are the property name, the parameters, and the value
type, followed by one or more values. The group of a vCard property is
encoded as a "group" parameter.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_core import to_json

from .exceptions import MimeDirParseError

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "JsonProperty",
    "parse_json_property",
    "json_dumps",
]

GROUP = "group"


class JsonProperty(BaseModel):
    """A jCard or jCal property tuple."""

    name: str = Field(min_length=1)
    parameters: dict[str, str | list[str]] = Field(default_factory=dict)
    group: str | None = None
    value_type: str = Field(min_length=1)
    values: list[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def parse_tuple(cls, data: Any) -> Any:
        """Convert the array encoding into the model fields."""
        if not isinstance(data, (list, tuple)):
            return data
        if len(data) < 3:
            raise ValueError(
                f"Expected property with name, parameters and value type, got {data}"
            )
        parameters = data[1]
        group = None
        if isinstance(parameters, dict) and GROUP in parameters:
            parameters = dict(parameters)
            group = parameters.pop(GROUP)
        return {
            "name": data[0],
            "parameters": parameters,
            "group": group,
            "value_type": data[2],
            "values": list(data[3:]),
        }


def parse_json_property(data: Any) -> JsonProperty:
    """Parse a jCard/jCal property tuple.

    Will raise a MimeDirParseError on failure.
    """
    try:
        return JsonProperty.model_validate(data)
    except ValidationError as err:
        _LOGGER.debug("Failed to parse property %s", err)
        message = ["Failed to parse jCard/jCal property"]
        for error in err.errors():
            if msg := error.get("msg"):
                message.append(msg)
        raise MimeDirParseError(": ".join(message), detailed_error=str(err)) from err


def json_dumps(value: Any) -> str:
    """Encode a jCard/jCal structure as JSON text."""
    return to_json(value).decode()
