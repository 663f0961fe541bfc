"""Registry of property value kinds.

Each value kind is a `Property` subclass that knows how to encode and decode
its raw mimedir value. Kinds are registered by their value type name, which
is the name used in the VALUE parameter (e.g. `VALUE=BINARY`).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..property import Property

_LOGGER = logging.getLogger(__name__)

T_TYPE = TypeVar("T_TYPE", bound=type[Property])


class Registry:
    """Registry of property value kinds."""

    def __init__(
        self,
    ) -> None:
        """Initialize Registry."""
        self._items: dict[str, type[Property]] = {}

    def register(self, name: str) -> Callable[[T_TYPE], T_TYPE]:
        """Return decorator to register a value kind.

        The name is the Property Value Data Type name.
        """

        def decorator(cls: T_TYPE) -> T_TYPE:
            """Register decorated class."""
            cls.value_type = name
            self._items[name] = cls
            _LOGGER.debug("Registered value type %s as %s", name, cls.__name__)
            return cls

        return decorator

    def get(self, name: str) -> type[Property] | None:
        """Return the value kind for the value type name, ignoring case."""
        return self._items.get(name.upper())

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._items

    @property
    def names(self) -> list[str]:
        """Return the names of all registered value types."""
        return list(self._items)


PROPERTY_TYPE: Registry = Registry()
