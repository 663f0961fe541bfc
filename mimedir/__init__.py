"""Property value model, codecs and validation for iCalendar and vCard.

A property such as `SUMMARY:Meeting` or `item1.TEL;TYPE=WORK:+1-555-0100`
owns its value and parameters, and can be encoded as folded mimedir text,
as a jCard/jCal tuple, or as an xCard/xCal element, and validated against
the rules of the document type it belongs to.
"""

__all__ = [
    "const",
    "contentlines",
    "diagnostics",
    "document",
    "exceptions",
    "node",
    "parameter",
    "projection",
    "property",
    "types",
    "util",
    "validators",
]
