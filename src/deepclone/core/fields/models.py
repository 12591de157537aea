"""Field descriptor models.

A FieldDescriptor is the reflective handle for one instance field: where it
lives (a ``__slots__`` member or the instance ``__dict__``), what it was
declared as, and whether copies of its value go through the identity map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from deepclone.core.identity import MISSING


class FieldStorage(Enum):
    """Where an instance keeps a field's value."""

    SLOT = auto()  # member descriptor created by __slots__
    DICT = auto()  # entry of the instance __dict__


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One instance field of a type, as declared at a single MRO level.

    Attributes:
        name: Attribute name (already mangled for private names).
        owner: Class of the MRO level declaring the field.
        declared: Declared annotation, ``object`` for unannotated slots.
        storage: Slot member or instance dict entry.
        track_identity: False when the declared type is tuple-like.
        slot: Member descriptor for SLOT storage.
    """

    name: str
    owner: type
    declared: Any
    storage: FieldStorage
    track_identity: bool = True
    slot: Any = field(default=None, repr=False, compare=False)

    def read(self, obj: Any) -> Any:
        """Read the field from obj without triggering properties.

        Returns:
            The stored value, or MISSING when the field is unset.
        """
        if self.storage is FieldStorage.SLOT:
            try:
                return self.slot.__get__(obj, self.owner)
            except AttributeError:
                return MISSING  # empty slot
        instance_dict = getattr(obj, "__dict__", None)
        if instance_dict is None:
            return MISSING
        return instance_dict.get(self.name, MISSING)

    def write(self, obj: Any, value: Any) -> None:
        """Store value into obj, bypassing ``__setattr__`` (frozen classes included)."""
        if self.storage is FieldStorage.SLOT:
            self.slot.__set__(obj, value)
        else:
            obj.__dict__[self.name] = value


@dataclass(frozen=True, slots=True)
class FieldLayout:
    """Cached field layout of a type.

    Attributes:
        fields: Fields needing a deep copy, most derived level first.
        declared_names: Every declared dict field name, immutable ones included.
            Instance ``__dict__`` entries outside this set are undeclared.
    """

    fields: tuple[FieldDescriptor, ...]
    declared_names: frozenset[str]
