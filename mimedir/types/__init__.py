"""Library of property value kinds.

Importing this package registers all value kinds with `PROPERTY_TYPE`.
"""

from .binary import BinaryProperty
from .boolean import BooleanProperty
from .data_types import PROPERTY_TYPE
from .integer import IntegerProperty
from .text import TextProperty
from .uri import UnknownProperty, UriProperty

__all__ = [
    "PROPERTY_TYPE",
    "BinaryProperty",
    "BooleanProperty",
    "IntegerProperty",
    "TextProperty",
    "UnknownProperty",
    "UriProperty",
]
