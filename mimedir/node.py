"""Base node shared by properties and parameters.

Every element of a document (properties and their parameters) is a node. A
node holds a weak reference to the document that owns it, which is used to
look up the document type during validation. The document is the sole owner
of its properties, so the reference never keeps a document alive.

Validation results are reported as a list of `Finding` objects with a
`Severity`:

  - `Severity.REPAIRED` - The issue was repaired (only with `ValidateOption.REPAIR`)
  - `Severity.MINOR` - An inconsequential issue
  - `Severity.SEVERE` - A severe issue
"""

from __future__ import annotations

import enum
import weakref
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, overload

from lxml import etree

from .exceptions import NodeAccessError

if TYPE_CHECKING:
    from .document import Document

__all__ = [
    "ValidateOption",
    "Severity",
    "Finding",
    "ElementList",
    "Node",
]


class ValidateOption(enum.IntFlag):
    """Options that control validation."""

    NONE = 0

    REPAIR = 1
    """Attempt to repair broken data in place."""

    PROFILE_CARDDAV = 2
    """Validate vCards on the assumption they need to be valid for CardDAV."""

    PROFILE_CALDAV = 4
    """Validate iCalendar objects on the assumption they need to be valid for CalDAV."""


class Severity(enum.IntEnum):
    """Severity level of a validation finding."""

    REPAIRED = 1
    MINOR = 2
    SEVERE = 3


@dataclass
class Finding:
    """A single problem detected during validation."""

    level: Severity
    message: str
    node: Node = field(repr=False, compare=False)


def repair_level(options: int) -> Severity:
    """Return the severity of a repairable problem given the validation options."""
    return Severity.REPAIRED if options & ValidateOption.REPAIR else Severity.SEVERE


class ElementList(Sequence["Node"]):
    """A read-only sequence of nodes."""

    def __init__(self, elements: Sequence[Node]) -> None:
        self._elements = tuple(elements)

    @overload
    def __getitem__(self, index: int) -> Node: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Node]: ...

    def __getitem__(self, index: int | slice) -> Node | Sequence[Node]:
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __setitem__(self, index: Any, value: Any) -> None:
        raise NodeAccessError("You can not add new objects to an ElementList")

    def __delitem__(self, index: Any) -> None:
        raise NodeAccessError("You can not remove objects from an ElementList")


class Node(ABC):
    """Root class for every element in an iCalendar or vCard object."""

    def __init__(self, root: Document | None) -> None:
        self._root: weakref.ref[Document] | None = (
            weakref.ref(root) if root is not None else None
        )

    @property
    def root(self) -> Document | None:
        """Return the owning document, if it is still alive."""
        if self._root is None:
            return None
        return self._root()

    @abstractmethod
    def serialize(self) -> str:
        """Serialize the node into the mimedir format."""

    @abstractmethod
    def json_serialize(self) -> Any:
        """Return the jCard/jCal representation of the node."""

    @abstractmethod
    def xml_element(self, namespace: str | None = None) -> etree._Element:
        """Return the xCard/xCal representation of the node."""

    def xml_serialize(self, namespace: str | None = None) -> str:
        """Serialize the xCard/xCal representation of the node as a string."""
        return etree.tostring(
            self.xml_element(namespace), encoding="unicode", pretty_print=True
        )

    def as_sequence(self) -> ElementList:
        """Return a view of this node as a single element sequence."""
        return ElementList([self])

    def validate(self, options: int = ValidateOption.NONE) -> list[Finding]:
        """Validate the node for correctness, returning any problems found."""
        return []

    def destroy(self) -> None:
        """Drop the reference to the owning document."""
        self._root = None
