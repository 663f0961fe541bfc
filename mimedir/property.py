"""Library for the property value model and its encodings.

A property is always in a NAME:VALUE structure, and may optionally contain
parameters and a group (vCard only):

  item1.TEL;TYPE=WORK,VOICE:+1-555-0100

A property owns its value, which is either absent, a single value, or an
ordered list of values. Concrete value kinds (text, binary, ...) are
subclasses that know how to encode the value into the raw mimedir text and
decode it back, see `mimedir.types`.

The same property can be encoded in three ways:

  - `serialize()` - the folded mimedir text used in .ics and .vcf files
  - `json_serialize()` - the jCard/jCal property tuple
  - `xml_element()` - the xCard/xCal element tree

Properties are validated (and optionally repaired in place) with `validate()`.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from lxml import etree

from .contentlines import fold
from .node import Finding, Node, ValidateOption
from .parameter import VALUE, Parameter, guess_parameter_name_by_value
from .projection import json_dumps
from .util import qname
from .validators import validate_property

if TYPE_CHECKING:
    from .document import Document

__all__ = [
    "Property",
]

PARAMETERS = "parameters"
GROUP = "group"


class Property(Node):
    """Abstract property with a value, parameters and an optional group."""

    value_type: ClassVar[str] = "UNKNOWN"
    """The default value type, corresponding to the VALUE parameter."""

    delimiter: str = ";"
    """Separator used when multiple values are encoded in a single raw value."""

    def __init__(
        self,
        root: Document | None,
        name: str,
        value: Any = None,
        parameters: Mapping[str | None, Any] | None = None,
        group: str | None = None,
    ) -> None:
        """Initialize Property.

        Parameters are added in order with `add()`, so repeated names are merged.
        """
        super().__init__(root)
        self.name = name
        self.group = group
        self.parameters: dict[str, Parameter] = {}
        self._value: Any = None
        for key, param_value in (parameters or {}).items():
            self.add(key, param_value)
        if value is not None:
            self.set_value(value)

    def set_value(self, value: Any) -> None:
        """Replace the current value with a single value or a list of values."""
        if isinstance(value, tuple):
            value = list(value)
        if isinstance(value, list) and not value:
            # An empty list is stored as an absent value
            value = None
        self._value = value

    def get_value(self) -> Any:
        """Return the value as a single value.

        A multi-valued property returns the raw encoded value, the same string
        that is used in the serialized output. Use `get_parts()` for the list.
        """
        if isinstance(self._value, list):
            if len(self._value) == 1:
                return self._value[0]
            return self.get_raw_mimedir_value()
        return self._value

    def set_parts(self, parts: list[Any]) -> None:
        """Set a multi-valued property."""
        self._value = list(parts) or None

    def get_parts(self) -> list[Any]:
        """Return the values as a list, even when there is a single value."""
        if self._value is None:
            return []
        if isinstance(self._value, list):
            return list(self._value)
        return [self._value]

    def add(self, name: str | None, value: Any = None) -> None:
        """Add a parameter, merging values into an existing parameter of the same name.

        When the name is omitted it is inferred from the value.
        """
        no_name = False
        if name is None:
            name = guess_parameter_name_by_value(value)
            no_name = True
        if (param := self.parameters.get(name.upper())) is not None:
            param.add_value(value)
            return
        param = Parameter(self.root, name, value)
        param.no_name = no_name
        self.parameters[param.name] = param

    def get_parameter(self, name: str) -> Parameter | None:
        """Return the parameter with the specified name, ignoring case."""
        return self.parameters.get(name.upper())

    def has_parameter(self, name: str) -> bool:
        """Return true if the property has a parameter with the specified name."""
        return name.upper() in self.parameters

    def set_parameter(self, name: str, value: Any) -> None:
        """Replace the parameter with the specified name."""
        param = Parameter(self.root, name, value)
        self.parameters[param.name] = param

    def remove_parameter(self, name: str) -> None:
        """Remove the parameter with the specified name, if present."""
        if (param := self.parameters.pop(name.upper(), None)) is not None:
            param.destroy()

    def get_value_type(self) -> str:
        """Return the type of value, corresponding to the VALUE parameter."""
        return self.value_type

    @abstractmethod
    def set_raw_mimedir_value(self, value: str) -> None:
        """Set the value from an unfolded but still escaped mimedir value."""

    @abstractmethod
    def get_raw_mimedir_value(self) -> str:
        """Return the escaped mimedir representation of the value."""

    def serialize(self) -> str:
        """Encode the property as folded mimedir content lines."""
        result = [f"{self.group}.{self.name}" if self.group else self.name]
        for param in self.parameters.values():
            result.append(";")
            result.append(param.serialize())
        result.append(":")
        result.append(self.get_raw_mimedir_value())
        return fold("".join(result))

    def get_json_value(self) -> list[Any]:
        """Return the value as it is encoded in jCard or jCal."""
        return self.get_parts()

    def set_json_value(self, value: list[Any]) -> None:
        """Set the value from a jCard or jCal value list."""
        if len(value) == 1:
            self.set_value(value[0])
        else:
            self.set_value(value)

    def _projected_parameters(self) -> list[Parameter]:
        """Return parameters included in jCard/jCal and xCard/xCal output."""
        return [param for param in self.parameters.values() if param.name != VALUE]

    def json_serialize(self) -> list[Any]:
        """Return the jCard/jCal property tuple.

        The result has the form `[name, parameters, value type, value, ...]`.
        """
        parameters: dict[str, Any] = {
            param.name.lower(): param.json_serialize()
            for param in self._projected_parameters()
        }
        # jCard encodes the property group as a separate parameter
        if self.group:
            parameters[GROUP] = self.group
        return [
            self.name.lower(),
            parameters,
            self.get_value_type().lower(),
            *self.get_json_value(),
        ]

    def to_json(self) -> str:
        """Encode the jCard/jCal property tuple as JSON text."""
        return json_dumps(self.json_serialize())

    def set_xml_value(self, value: list[Any]) -> None:
        """Set the value from the values of an xCard or xCal element."""
        self.set_json_value(value)

    def _xml_text(self, value: Any) -> str:
        """Return the text content of a single xCard/xCal value element."""
        return str(value)

    def xml_element(self, namespace: str | None = None) -> etree._Element:
        """Return the xCard/xCal element for the property."""
        element = etree.Element(qname(namespace, self.name.lower()))
        if parameters := self._projected_parameters():
            params_element = etree.SubElement(element, qname(namespace, PARAMETERS))
            for param in parameters:
                params_element.append(param.xml_element(namespace))

        value_tag = qname(namespace, self.get_value_type().lower())
        for values in self.get_json_value():
            if not isinstance(values, list):
                values = [values]
            for value in values:
                etree.SubElement(element, value_tag).text = self._xml_text(value)
        return element

    def validate(self, options: int = ValidateOption.NONE) -> list[Finding]:
        """Validate the property, repairing it in place when requested.

        Returns a list of findings, each with a severity level, a human readable
        message, and the offending node.
        """
        return validate_property(self, options)

    def destroy(self) -> None:
        """Drop the owning document reference and all parameters."""
        super().destroy()
        for param in self.parameters.values():
            param.destroy()
        self.parameters = {}

    def __copy__(self) -> Property:
        cls = self.__class__
        prop = cls.__new__(cls)
        prop.__dict__.update(self.__dict__)
        if isinstance(self._value, list):
            prop.set_parts(self._value)
        prop.parameters = {key: param.copy() for key, param in self.parameters.items()}
        return prop

    def __str__(self) -> str:
        value = self.get_value()
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, group={self.group!r}, "
            f"value={self._value!r}, parameters={list(self.parameters.values())!r})"
        )
