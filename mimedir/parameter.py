"""Parameters or meta information associated with a property.

Property parameters are additional modifiers on a property to specify extra
information about the value for the property (e.g. language, value type, a
display attribute, etc). A parameter may have multiple values, for example
`TYPE=WORK,FAX`.

Older vCard producers (version 2.1) may omit the parameter name entirely,
for example `TEL;WORK;FAX:+1-555-0100`. The name is then inferred from the
value with `guess_parameter_name_by_value`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from lxml import etree

from .const import DocumentType
from .node import Finding, Node, Severity, ValidateOption
from .util import qname

if TYPE_CHECKING:
    from .document import Document

__all__ = [
    "Parameter",
    "guess_parameter_name_by_value",
]

ENCODING = "ENCODING"
TYPE = "TYPE"
VALUE = "VALUE"

_RE_NAME = re.compile("[A-Z0-9-]+")

# Characters that require the value to be placed in quoted text
_RE_QUOTE_CHARS = re.compile(r'[\n":;^,+]')

# rfc6868 escaping of characters within quoted text
_RFC6868_ENCODE = str.maketrans({"^": "^^", "\n": "^n", '"': "^'"})

_ENCODING_VALUES = {"7-BIT", "QUOTED-PRINTABLE", "BASE64"}
_TYPE_VALUES = {
    # Common types
    "WORK",
    "HOME",
    "PREF",
    # Delivery label types
    "DOM",
    "INTL",
    "POSTAL",
    "PARCEL",
    # Telephone types
    "VOICE",
    "FAX",
    "MSG",
    "CELL",
    "PAGER",
    "BBS",
    "MODEM",
    "CAR",
    "ISDN",
    "VIDEO",
    # Email types
    "AOL",
    "APPLELINK",
    "ATTMAIL",
    "CIS",
    "EWORLD",
    "INTERNET",
    "IBMMAIL",
    "MCIMAIL",
    "POWERSHARE",
    "PRODIGY",
    "TLX",
    "X400",
    # Photo and logo formats
    "GIF",
    "CGM",
    "WMF",
    "BMP",
    "DIB",
    "PICT",
    "TIFF",
    "PDF",
    "PS",
    "JPEG",
    "MPEG",
    "MPEG2",
    "AVI",
    "QTIME",
    # Sound formats
    "WAVE",
    "PCM",
    "AIFF",
    # Key types
    "X509",
    "PGP",
}
_VALUE_VALUES = {"INLINE", "URL", "CONTENT-ID", "CID"}


def guess_parameter_name_by_value(value: Any) -> str:
    """Return the parameter name for a value that was given without one.

    This is only common in vCard 2.1 where e.g. `TEL;WORK:...` is a shorthand
    for `TEL;TYPE=WORK:...`. An empty string is returned when the value is not
    recognized.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    if not isinstance(value, str):
        return ""
    value = value.upper()
    if value in _ENCODING_VALUES:
        return ENCODING
    if value in _TYPE_VALUES:
        return TYPE
    if value in _VALUE_VALUES:
        return VALUE
    return ""


class Parameter(Node):
    """A named, possibly multi-valued, attachment to a property."""

    def __init__(self, root: Document | None, name: str, value: Any = None) -> None:
        super().__init__(root)
        self.name = name.upper()
        self.no_name = False
        """True when the name was inferred from the value."""
        self._value: str | list[str] | None = None
        self.set_value(value)

    def set_value(self, value: str | list[str] | None) -> None:
        """Replace the current value with a single value or a list of values."""
        if isinstance(value, tuple):
            value = list(value)
        self._value = value

    def get_value(self) -> str | None:
        """Return the value, with multiple values joined by a comma."""
        if isinstance(self._value, list):
            return ",".join(self._value)
        return self._value

    def set_parts(self, parts: list[str]) -> None:
        """Set multiple values for the parameter."""
        self._value = list(parts)

    def get_parts(self) -> list[str]:
        """Return all values of the parameter as a list."""
        if self._value is None:
            return []
        if isinstance(self._value, list):
            return list(self._value)
        return [self._value]

    def add_value(self, part: str | list[str] | None) -> None:
        """Append one or more values to the parameter."""
        if self._value is None:
            self.set_value(part)
            return
        new_parts = part if isinstance(part, (list, tuple)) else [part]
        self._value = self.get_parts() + [p for p in new_parts if p is not None]

    def has(self, value: str) -> bool:
        """Return true if the parameter contains the value, ignoring case."""
        value = value.lower()
        return any(part.lower() == value for part in self.get_parts())

    def serialize(self) -> str:
        """Encode the parameter, e.g. `TYPE=WORK,FAX`, without the leading `;`."""
        parts = self.get_parts()
        if not parts:
            return f"{self.name}="

        if self.no_name and (root := self.root) is not None:
            if root.document_type is DocumentType.VCARD21:
                return ";".join(parts)

        values = []
        for part in parts:
            if _RE_QUOTE_CHARS.search(part):
                values.append(f'"{part.translate(_RFC6868_ENCODE)}"')
            else:
                values.append(part)
        return f"{self.name}={','.join(values)}"

    def json_serialize(self) -> str | list[str] | None:
        """Return the jCard/jCal representation of the parameter value."""
        if isinstance(self._value, list):
            return list(self._value)
        return self._value

    def xml_element(self, namespace: str | None = None) -> etree._Element:
        """Return the xCard/xCal element for the parameter."""
        element = etree.Element(qname(namespace, self.name.lower()))
        for part in self.get_parts():
            etree.SubElement(element, qname(namespace, "text")).text = part
        return element

    def validate(self, options: int = ValidateOption.NONE) -> list[Finding]:
        """Validate the parameter name."""
        if not self.name:
            return [
                Finding(
                    Severity.SEVERE,
                    f"Parameter value {self.get_value()} has no name and the name "
                    "could not be inferred",
                    self,
                )
            ]
        if not _RE_NAME.fullmatch(self.name):
            return [
                Finding(
                    Severity.SEVERE,
                    f"The parameter name: {self.name} contains invalid characters. "
                    "Only A-Z, 0-9 and - are allowed",
                    self,
                )
            ]
        return []

    def copy(self) -> Parameter:
        """Return a copy of the parameter owned by the same document."""
        value = list(self._value) if isinstance(self._value, list) else self._value
        param = Parameter(self.root, self.name, value)
        param.no_name = self.no_name
        return param

    def __str__(self) -> str:
        return self.get_value() or ""

    def __repr__(self) -> str:
        return f"Parameter(name={self.name!r}, value={self._value!r})"
