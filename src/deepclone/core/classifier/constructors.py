"""Copy constructors for externally defined types.

Some types keep their state where a field-wise clone cannot reach it (C
extension types such as ``xml.etree.ElementTree.Element``). For those the
engine hands the whole instance to a registered constructor that returns
an independent copy.

Usage:
    register_copy_constructor(Element, lambda e: copy.deepcopy(e))
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable
from typing import Any
from xml.etree import ElementTree

logger = logging.getLogger(__name__)

type CopyConstructor = Callable[[Any], Any]


def copy_element(element: ElementTree.Element) -> ElementTree.Element:
    """Copy an XML element together with its subtree."""
    return copy.deepcopy(element)


class CopyConstructorRegistry:
    """Maps types to the constructor producing an independent copy.

    Lookups follow the MRO, so a constructor registered for a base class
    also serves its subclasses. Resolved lookups are cached per type and the
    cache is dropped whenever a registration changes the answer.
    """

    def __init__(self) -> None:
        """Initialize empty copy constructor registry."""
        self._lock = threading.Lock()
        self._constructors: dict[type, CopyConstructor] = {}
        self._resolved: dict[type, CopyConstructor | None] = {}

    def register(self, cls: type, constructor: CopyConstructor) -> None:
        """Register the copy constructor for a type and its subclasses.

        Args:
            cls: Type whose instances are copied by constructor.
            constructor: Callable taking the original and returning the copy.

        Raises:
            TypeError: If cls is not a class or constructor is not callable.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Copy constructors are registered per class, got {cls!r}")
        if not callable(constructor):
            raise TypeError(f"Copy constructor for {cls.__qualname__} must be callable")
        with self._lock:
            self._constructors[cls] = constructor
            self._resolved = {}
        logger.debug("Registered copy constructor for %s.%s", cls.__module__, cls.__qualname__)

    def lookup(self, cls: type) -> CopyConstructor | None:
        """Find the copy constructor serving a runtime type.

        Args:
            cls: Runtime type of the value being copied.

        Returns:
            The constructor of the nearest registered base, None if none.
        """
        resolved = self._resolved
        if cls in resolved:
            return resolved[cls]
        with self._lock:
            found = None
            for base in cls.__mro__:
                if base in self._constructors:
                    found = self._constructors[base]
                    break
            self._resolved[cls] = found
        return found

    def __contains__(self, cls: object) -> bool:
        return cls in self._constructors


# Module-level registry instance
_constructors = CopyConstructorRegistry()
_constructors.register(ElementTree.Element, copy_element)


def get_constructors() -> CopyConstructorRegistry:
    """Access the global copy constructor registry.

    Returns:
        The process-wide CopyConstructorRegistry instance.
    """
    return _constructors


def register_copy_constructor(cls: type, constructor: CopyConstructor) -> None:
    """Register a copy constructor in the global registry."""
    _constructors.register(cls, constructor)
