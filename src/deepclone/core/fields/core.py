"""Field enumeration and the per-type field cache.

Usage:
    cache = get_field_cache()
    for descriptor in cache.non_shallow_fields(type(obj)):
        value = descriptor.read(obj)
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
import types
import typing
from collections.abc import Iterator
from typing import Any

from deepclone.core.classifier import ImmutableTypeRegistry, get_registry, is_value_type
from deepclone.core.fields.models import FieldDescriptor, FieldLayout, FieldStorage

logger = logging.getLogger(__name__)

_SPECIAL_SLOTS = frozenset({"__dict__", "__weakref__"})


def _mangle(level: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for class bodies."""
    if name.startswith("__") and not name.endswith("__"):
        stripped = level.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{name}"
    return name


def _own_slots(level: type) -> dict[str, Any]:
    """Member descriptors declared by ``__slots__`` at exactly this level, in order."""
    declared = level.__dict__.get("__slots__", ())
    if isinstance(declared, str):
        declared = (declared,)
    slots: dict[str, Any] = {}
    for name in declared:
        if name in _SPECIAL_SLOTS:
            continue
        mangled = _mangle(level, name)
        descriptor = level.__dict__.get(mangled)
        if isinstance(descriptor, types.MemberDescriptorType):
            slots[mangled] = descriptor
    return slots


def _own_annotations(level: type) -> dict[str, Any]:
    """Annotations declared at exactly this level.

    Strings are evaluated where their names resolve; otherwise the raw
    annotations are returned and such fields simply count as mutable.
    """
    try:
        return inspect.get_annotations(level, eval_str=True)
    except (NameError, SyntaxError, TypeError, AttributeError):
        try:
            return inspect.get_annotations(level)
        except (NameError, TypeError, AttributeError):
            logger.debug("Annotations of %s unavailable, using slots only", level.__qualname__)
            return {}


def _is_pseudo_field(annotation: Any) -> bool:
    """ClassVar and InitVar annotations declare no instance storage."""
    if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
        return True
    if annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar):
        return True
    if isinstance(annotation, str):
        bare = annotation.removeprefix("typing.").removeprefix("dataclasses.")
        return bare.startswith(("ClassVar", "InitVar"))
    return False


def declared_fields(level: type) -> Iterator[FieldDescriptor]:
    """Enumerate the instance fields declared at a single MRO level.

    Annotated fields come first in declaration order, then slots that carry
    no annotation (declared as ``object``).

    Args:
        level: One class of an MRO.

    Yields:
        A descriptor per field, immutable ones included.
    """
    slots = _own_slots(level)
    for name, annotation in _own_annotations(level).items():
        if _is_pseudo_field(annotation):
            continue
        slot = slots.pop(name, None)
        yield FieldDescriptor(
            name=name,
            owner=level,
            declared=annotation,
            storage=FieldStorage.SLOT if slot is not None else FieldStorage.DICT,
            track_identity=not is_value_type(annotation),
            slot=slot,
        )
    for name, slot in slots.items():
        yield FieldDescriptor(
            name=name, owner=level, declared=object, storage=FieldStorage.SLOT, slot=slot
        )


class FieldCache:
    """Process-wide cache of the fields each type needs deep copied.

    The layout of a type is a pure function of the type, so concurrent
    sessions may compute the same entry; the first stored one wins and
    entries are never replaced.

    Args:
        registry: Classifier deciding which declared types are skipped.
    """

    def __init__(self, registry: ImmutableTypeRegistry | None = None) -> None:
        self._registry = registry if registry is not None else get_registry()
        self._lock = threading.Lock()
        self._layouts: dict[type, FieldLayout] = {}

    def layout(self, cls: type) -> FieldLayout:
        """Get (computing on first use) the field layout of a type.

        Args:
            cls: Runtime type of an instance.

        Returns:
            Cached FieldLayout.
        """
        layout = self._layouts.get(cls)
        if layout is None:
            computed = self._compute(cls)
            with self._lock:
                layout = self._layouts.setdefault(cls, computed)
        return layout

    def non_shallow_fields(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Fields across the MRO whose declared type is not deeply immutable.

        Args:
            cls: Runtime type of an instance.

        Returns:
            Descriptors ordered most derived level first, declaration order
            within a level.
        """
        return self.layout(cls).fields

    def _compute(self, cls: type) -> FieldLayout:
        fields: list[FieldDescriptor] = []
        declared_names: set[str] = set()
        for level in cls.__mro__:
            if level is object:
                continue
            for descriptor in declared_fields(level):
                if descriptor.storage is FieldStorage.DICT:
                    # A redeclaration in a subclass shadows the base declaration
                    if descriptor.name in declared_names:
                        continue
                    declared_names.add(descriptor.name)
                if self._registry.is_deeply_immutable(descriptor.declared):
                    continue
                fields.append(descriptor)
        logger.debug(
            "Field layout for %s.%s: %d fields need copying",
            cls.__module__,
            cls.__qualname__,
            len(fields),
        )
        return FieldLayout(fields=tuple(fields), declared_names=frozenset(declared_names))

    def __contains__(self, cls: object) -> bool:
        return cls in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)


# Module-level cache instance
_field_cache = FieldCache()


def get_field_cache() -> FieldCache:
    """Access the global field cache.

    Returns:
        The process-wide FieldCache instance.
    """
    return _field_cache
