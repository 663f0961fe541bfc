"""Documents that own a list of properties.

A document is the root of an iCalendar or vCard object. It is the sole owner
of its properties: properties only hold a weak reference back to the
document, used to look up the document type when validating.

This is an example of building and encoding a vCard:
```python
from mimedir.const import DocumentType
from mimedir.document import Document

vcard = Document(DocumentType.VCARD40)
vcard.add_property("FN", "Jane Doe")
vcard.add_property("item1.TEL", "+1-555-0100", {"TYPE": ["WORK", "VOICE"]})
print(vcard.serialize())
```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lxml import etree

from .const import DocumentType
from .contentlines import CRLF
from .exceptions import MimeDirParseError
from .node import Finding, ValidateOption
from .parameter import ENCODING, VALUE, guess_parameter_name_by_value
from .projection import json_dumps, parse_json_property
from .property import Property
from .types import PROPERTY_TYPE
from .util import qname

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Document",
]

ATTR_BEGIN = "BEGIN"
ATTR_END = "END"

DEFAULT_VALUE_TYPE = "UNKNOWN"
BINARY_ENCODINGS = {"B", "BASE64"}

# The value type used for a property when there is no VALUE parameter.
DEFAULT_PROPERTY_TYPES: dict[str, str] = {
    # iCalendar
    "ATTACH": "URI",
    "CATEGORIES": "TEXT",
    "CLASS": "TEXT",
    "COMMENT": "TEXT",
    "CONTACT": "TEXT",
    "DESCRIPTION": "TEXT",
    "LOCATION": "TEXT",
    "PERCENT-COMPLETE": "INTEGER",
    "PRIORITY": "INTEGER",
    "PRODID": "TEXT",
    "REPEAT": "INTEGER",
    "REQUEST-STATUS": "TEXT",
    "RESOURCES": "TEXT",
    "SEQUENCE": "INTEGER",
    "STATUS": "TEXT",
    "SUMMARY": "TEXT",
    "TRANSP": "TEXT",
    "TZID": "TEXT",
    "TZNAME": "TEXT",
    "TZURL": "URI",
    "UID": "TEXT",
    "URL": "URI",
    "VERSION": "TEXT",
    # vCard
    "ADR": "TEXT",
    "CALADRURI": "URI",
    "CALURI": "URI",
    "CLIENTPIDMAP": "TEXT",
    "EMAIL": "TEXT",
    "FBURL": "URI",
    "FN": "TEXT",
    "GENDER": "TEXT",
    "IMPP": "URI",
    "KEY": "URI",
    "KIND": "TEXT",
    "LABEL": "TEXT",
    "LOGO": "URI",
    "MAILER": "TEXT",
    "MEMBER": "URI",
    "N": "TEXT",
    "NICKNAME": "TEXT",
    "NOTE": "TEXT",
    "ORG": "TEXT",
    "PHOTO": "URI",
    "ROLE": "TEXT",
    "SORT-STRING": "TEXT",
    "SOUND": "URI",
    "SOURCE": "URI",
    "TEL": "TEXT",
    "TITLE": "TEXT",
}

DOCUMENT_NAMES = {
    DocumentType.VCARD21: "VCARD",
    DocumentType.VCARD30: "VCARD",
    DocumentType.VCARD40: "VCARD",
}
DEFAULT_DOCUMENT_NAME = "VCALENDAR"


def _first_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


class Document:
    """The root of an iCalendar or vCard object."""

    def __init__(
        self, document_type: DocumentType = DocumentType.UNKNOWN, name: str | None = None
    ) -> None:
        """Initialize Document."""
        self.document_type = document_type
        self.name = name or DOCUMENT_NAMES.get(document_type, DEFAULT_DOCUMENT_NAME)
        self.properties: list[Property] = []

    def property_class(
        self,
        name: str,
        parameters: Mapping[str | None, Any] | None = None,
        value_type: str | None = None,
    ) -> type[Property]:
        """Return the value kind for a new property.

        The value kind is chosen from the explicit value type, the VALUE
        parameter, an inline binary ENCODING parameter, then the default value
        type for the property name.
        """
        encoding: str | None = None
        for key, param_value in (parameters or {}).items():
            if key is None:
                key = guess_parameter_name_by_value(param_value)
            if key.upper() == VALUE and value_type is None:
                value_type = _first_value(param_value)
            elif key.upper() == ENCODING:
                encoding = _first_value(param_value)

        if value_type and (cls := PROPERTY_TYPE.get(value_type)):
            return cls
        if encoding and encoding.upper() in BINARY_ENCODINGS:
            return PROPERTY_TYPE.get("BINARY") or self.default_property_class(name)
        return self.default_property_class(name)

    def default_property_class(self, name: str) -> type[Property]:
        """Return the value kind used for the name when there is no VALUE parameter."""
        value_type = DEFAULT_PROPERTY_TYPES.get(name.upper(), DEFAULT_VALUE_TYPE)
        if (cls := PROPERTY_TYPE.get(value_type)) is None:
            raise ValueError(f"No value kind registered for {value_type}")
        return cls

    def create_property(
        self,
        name: str,
        value: Any = None,
        parameters: Mapping[str | None, Any] | None = None,
        value_type: str | None = None,
    ) -> Property:
        """Create a new property owned by this document, without adding it.

        The name may contain a group prefix, e.g. `item1.TEL`.
        """
        group: str | None = None
        if "." in name:
            group, name = name.split(".", 1)
        name = name.upper()
        cls = self.property_class(name, parameters, value_type)
        _LOGGER.debug("Creating property %s as %s", name, cls.__name__)
        return cls(self, name, value, parameters, group)

    def create_property_from_json(self, data: Any) -> Property:
        """Create a new property from a jCard/jCal property tuple, without adding it.

        Will raise a MimeDirParseError if the tuple is malformed.
        """
        json_property = parse_json_property(data)
        value_type = json_property.value_type.upper()
        prop = self.create_property(
            json_property.name,
            parameters=json_property.parameters,
            value_type=value_type,
        )
        prop.group = json_property.group
        if type(prop) is not self.default_property_class(prop.name):
            prop.set_parameter(VALUE, value_type)
        try:
            prop.set_json_value(json_property.values)
        except ValueError as err:
            raise MimeDirParseError(
                f"Invalid value for property {prop.name}", detailed_error=str(err)
            ) from err
        return prop

    def add(self, prop: Property) -> Property:
        """Add a property to the document."""
        self.properties.append(prop)
        return prop

    def add_property(
        self,
        name: str,
        value: Any = None,
        parameters: Mapping[str | None, Any] | None = None,
        value_type: str | None = None,
    ) -> Property:
        """Create a new property and add it to the document."""
        return self.add(self.create_property(name, value, parameters, value_type))

    def select(self, name: str) -> list[Property]:
        """Return all properties with the name, optionally prefixed by a group."""
        group: str | None = None
        if "." in name:
            group, name = name.split(".", 1)
        name = name.upper()
        return [
            prop
            for prop in self.properties
            if prop.name.upper() == name
            and (group is None or (prop.group or "").upper() == group.upper())
        ]

    def remove(self, name_or_prop: str | Property) -> None:
        """Remove a property, or all properties with the name."""
        if isinstance(name_or_prop, Property):
            removed = [name_or_prop]
        else:
            removed = self.select(name_or_prop)
        for prop in removed:
            self.properties.remove(prop)
            prop.destroy()

    def serialize(self) -> str:
        """Encode the document as mimedir content."""
        contentlines = [f"{ATTR_BEGIN}:{self.name}{CRLF}"]
        contentlines.extend(prop.serialize() for prop in self.properties)
        contentlines.append(f"{ATTR_END}:{self.name}{CRLF}")
        return "".join(contentlines)

    def json_serialize(self) -> list[Any]:
        """Return the jCard or jCal representation of the document."""
        properties = [prop.json_serialize() for prop in self.properties]
        if self.document_type.is_vcard:
            return [self.name.lower(), properties]
        return [self.name.lower(), properties, []]

    def to_json(self) -> str:
        """Encode the jCard or jCal representation as JSON text."""
        return json_dumps(self.json_serialize())

    def xml_element(self) -> etree._Element:
        """Return the xCard or xCal representation of the document."""
        namespace = self.document_type.xml_namespace
        nsmap = {None: namespace} if namespace else None
        if self.document_type.is_vcard:
            root = etree.Element(qname(namespace, "vcards"), nsmap=nsmap)
            container = etree.SubElement(root, qname(namespace, self.name.lower()))
        else:
            root = etree.Element(qname(namespace, "icalendar"), nsmap=nsmap)
            component = etree.SubElement(root, qname(namespace, self.name.lower()))
            container = etree.SubElement(component, qname(namespace, "properties"))
        for prop in self.properties:
            container.append(prop.xml_element(namespace))
        return root

    def xml_serialize(self) -> str:
        """Encode the xCard or xCal representation of the document."""
        return etree.tostring(
            self.xml_element(), encoding="unicode", pretty_print=True
        )

    def validate(self, options: int = ValidateOption.NONE) -> list[Finding]:
        """Validate every property of the document."""
        findings = []
        for prop in self.properties:
            findings.extend(prop.validate(options))
        return findings

    def destroy(self) -> None:
        """Tear down all properties of the document."""
        for prop in self.properties:
            prop.destroy()
        self.properties = []
