"""Constants for the mimedir library."""

from __future__ import annotations

import enum

__all__ = [
    "DocumentType",
]


class DocumentType(str, enum.Enum):
    """The format and version of a document."""

    UNKNOWN = "UNKNOWN"
    VCALENDAR10 = "VCALENDAR-1.0"
    ICALENDAR20 = "ICALENDAR-2.0"
    VCARD21 = "VCARD-2.1"
    VCARD30 = "VCARD-3.0"
    VCARD40 = "VCARD-4.0"

    @property
    def is_vcard(self) -> bool:
        """Return true if the document is any version of vCard."""
        return self in (DocumentType.VCARD21, DocumentType.VCARD30, DocumentType.VCARD40)

    @property
    def xml_namespace(self) -> str | None:
        """Return the xCard or xCal namespace, if the format has one."""
        return XML_NAMESPACES.get(self)


XCAL_NAMESPACE = "urn:ietf:params:xml:ns:icalendar-2.0"
XCARD_NAMESPACE = "urn:ietf:params:xml:ns:vcard-4.0"

XML_NAMESPACES = {
    DocumentType.ICALENDAR20: XCAL_NAMESPACE,
    DocumentType.VCARD40: XCARD_NAMESPACE,
}
