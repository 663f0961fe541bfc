"""Validation rules for properties.

Each rule inspects a property and returns a list of findings. When the
`ValidateOption.REPAIR` option is set a rule may also fix the problem in
place, in which case the finding is reported as `Severity.REPAIRED`. Rules
are independent of each other and are all applied, in order, by
`validate_property`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from .const import DocumentType
from .node import Finding, Severity, ValidateOption, repair_level
from .parameter import ENCODING
from .util import convert_to_utf8, find_control_character, is_utf8

if TYPE_CHECKING:
    from .property import Property

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "ALLOWED_ENCODINGS",
    "validate_utf8",
    "validate_name",
    "validate_encoding",
    "validate_parameters",
    "validate_property",
]

_RE_NAME = re.compile("[A-Z0-9-]+")
_RE_INVALID_NAME_CHARS = re.compile("[^A-Z0-9-]")

ALLOWED_ENCODINGS: dict[DocumentType, set[str]] = {
    DocumentType.ICALENDAR20: {"8BIT", "BASE64"},
    DocumentType.VCARD21: {"QUOTED-PRINTABLE", "BASE64", "8BIT"},
    DocumentType.VCARD30: {"B"},
}


def validate_utf8(prop: Property, options: int) -> list[Finding]:
    """Verify the raw value is valid UTF-8 without control characters."""
    old_value = prop.get_raw_mimedir_value()
    if is_utf8(old_value):
        return []

    level = Severity.SEVERE
    if options & ValidateOption.REPAIR:
        new_value = convert_to_utf8(old_value)
        _LOGGER.debug("Repairing %s value %r as %r", prop.name, old_value, new_value)
        prop.set_raw_mimedir_value(new_value)
        level = Severity.REPAIRED

    if (char := find_control_character(old_value)) is not None:
        message = f"Property contained a control character (0x{ord(char):02x})"
    else:
        message = f"Property is not valid UTF-8! {old_value!r}"
    return [Finding(level, message, prop)]


def validate_name(prop: Property, options: int) -> list[Finding]:
    """Verify the property name only contains A-Z, 0-9 and dashes."""
    if _RE_NAME.fullmatch(prop.name):
        return []

    finding = Finding(
        repair_level(options),
        f"The property name: {prop.name} contains invalid characters. "
        "Only A-Z, 0-9 and - are allowed",
        prop,
    )
    if options & ValidateOption.REPAIR:
        old_name = prop.name
        name = old_name.replace("_", "-").upper()
        prop.name = _RE_INVALID_NAME_CHARS.sub("", name)
        _LOGGER.debug("Repaired property name %r as %r", old_name, prop.name)
    return [finding]


def validate_encoding(prop: Property, options: int) -> list[Finding]:
    """Verify the ENCODING parameter is allowed by the document type."""
    if (encoding_param := prop.get_parameter(ENCODING)) is None:
        return []

    root = prop.root
    document_type = root.document_type if root is not None else DocumentType.UNKNOWN
    if document_type is DocumentType.VCARD40:
        return [
            Finding(Severity.SEVERE, "ENCODING parameter is not valid in vCard 4.", prop)
        ]

    findings = []
    encoding = str(encoding_param)
    if (
        document_type is DocumentType.VCARD30
        and options & ValidateOption.REPAIR
        and encoding.upper() == "BASE64"
    ):
        encoding = "B"
        prop.set_parameter(ENCODING, encoding)
        findings.append(
            Finding(
                Severity.REPAIRED,
                "ENCODING=BASE64 has been transformed to ENCODING=B.",
                prop,
            )
        )

    allowed = ALLOWED_ENCODINGS.get(document_type)
    if allowed and encoding.upper() not in allowed:
        findings.append(
            Finding(
                Severity.SEVERE,
                f"ENCODING={encoding.upper()} is not valid for this document type.",
                prop,
            )
        )
    return findings


def validate_parameters(prop: Property, options: int) -> list[Finding]:
    """Run validation of every parameter of the property."""
    findings = []
    for param in prop.parameters.values():
        findings.extend(param.validate(options))
    return findings


PROPERTY_RULES: list[Callable[[Property, int], list[Finding]]] = [
    validate_utf8,
    validate_name,
    validate_encoding,
    validate_parameters,
]


def validate_property(prop: Property, options: int) -> list[Finding]:
    """Apply all property rules, returning the findings in rule order."""
    findings = []
    for rule in PROPERTY_RULES:
        findings.extend(rule(prop, options))
    return findings
