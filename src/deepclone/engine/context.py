"""Copy session: the recursive deep copy engine.

DeepCopyContext is a stateful service owning one identity map. It borrows
the process-wide classifier, copy constructor registry and field cache.

Usage:
    context = DeepCopyContext()
    first, second = context.copy(a), context.copy(b)  # one session, shared refs kept
"""

from __future__ import annotations

import collections
import copy
import types
from typing import Any

import numpy as np

from deepclone.core.arrays import (
    ElementPolicy,
    element_policy,
    replace_array_elements,
    replace_list_items,
    replace_mapping_items,
    replace_set_items,
)
from deepclone.core.classifier import (
    CopyConstructor,
    CopyConstructorRegistry,
    ImmutableTypeRegistry,
    get_constructors,
    get_registry,
    is_callable_reference,
)
from deepclone.core.fields import FieldCache, get_field_cache
from deepclone.core.identity import MISSING, IdentityMap


def _rebuild_like(original: tuple[Any, ...] | frozenset[Any], items: list[Any]) -> Any:
    """Build a container of the same type as original holding items."""
    cls = type(original)
    if cls is tuple:
        return tuple(items)
    if cls is frozenset:
        return frozenset(items)
    # Subclasses (NamedTuple included) skip their own __new__, as copy.copy skips __init__
    base = tuple if isinstance(original, tuple) else frozenset
    return base.__new__(cls, items)


class DeepCopyContext:
    """One deep copy session.

    Every ``copy`` call on the same context shares the identity map, so
    objects reachable from several roots are copied once. Contexts are not
    thread-safe; use one per thread (the shared caches are).

    Args:
        registry: Immutable type classifier (default: process-wide).
        constructors: Copy constructor registry (default: process-wide).
        field_cache: Field layouts (default: process-wide, or a private
            cache bound to registry when a custom registry is given).
    """

    def __init__(
        self,
        registry: ImmutableTypeRegistry | None = None,
        constructors: CopyConstructorRegistry | None = None,
        field_cache: FieldCache | None = None,
    ) -> None:
        if field_cache is None:
            field_cache = get_field_cache() if registry is None else FieldCache(registry)
        self._registry = registry if registry is not None else get_registry()
        self._constructors = constructors if constructors is not None else get_constructors()
        self._fields = field_cache
        self._visited = IdentityMap()

    @property
    def visited(self) -> IdentityMap:
        """Originals copied so far in this session, mapped to their clones."""
        return self._visited

    def copy[T](self, original: T, track_identity: bool = True) -> T | None:
        """Deep copy a value.

        Args:
            original: Value to copy.
            track_identity: Consult and populate the identity map. Disabled
                for values that cannot be referenced from elsewhere
                (tuples held by tuple-declared fields, structured array records).

        Returns:
            The copy; the value itself when deeply immutable or a class or
            module; None for None and for function references.
        """
        if original is None:
            return None

        cls = type(original)
        if self._registry.is_deeply_immutable(cls) or isinstance(
            original, (type, types.ModuleType)
        ):
            return original

        constructor = self._constructors.lookup(cls)
        if constructor is not None:
            return self._construct(original, constructor, track_identity)

        if is_callable_reference(original):
            return None

        if track_identity:
            clone = self._visited.get(original)
            if clone is not MISSING:
                return clone

        if isinstance(original, (tuple, frozenset)):
            return self._rebuild(original, track_identity)

        clone = copy.copy(original)
        if clone is original:
            # __copy__ returning self marks a singleton
            return original
        # Registered before recursing so cycles resolve to this clone
        if track_identity:
            self._visited.add(original, clone)

        self._copy_contents(original, clone)
        return clone

    def _copy_tracked(self, value: Any) -> Any:
        return self.copy(value, True)

    def _construct(self, original: Any, constructor: CopyConstructor, track_identity: bool) -> Any:
        if track_identity:
            clone = self._visited.get(original)
            if clone is not MISSING:
                return clone
        clone = constructor(original)
        if track_identity:
            self._visited.add(original, clone)
        return clone

    def _rebuild(self, original: tuple[Any, ...] | frozenset[Any], track_identity: bool) -> Any:
        """Copy an immutable container by building a new one from copied items."""
        items = [self.copy(item, True) for item in original]
        state = getattr(original, "__dict__", None)
        if not state and all(new is old for new, old in zip(items, original, strict=True)):
            return original
        # A cycle through a mutable item may have rebuilt this container already
        clone = self._visited.get(original)
        if clone is not MISSING:
            return clone
        clone = _rebuild_like(original, items)
        if track_identity:
            self._visited.add(original, clone)
        if state:
            self._copy_fields(original, clone)
        return clone

    def _copy_contents(self, original: Any, clone: Any) -> None:
        if isinstance(clone, np.ndarray):
            self._copy_array(clone)
        elif isinstance(clone, (list, collections.deque)):
            replace_list_items(clone, self._copy_tracked)
        elif isinstance(clone, dict):
            replace_mapping_items(clone, self._copy_tracked)
        elif isinstance(clone, set):
            replace_set_items(clone, self._copy_tracked)
        self._copy_fields(original, clone)

    def _copy_array(self, clone: np.ndarray) -> None:
        policy = element_policy(clone.dtype, self._registry)
        if policy is ElementPolicy.SHALLOW:
            return
        if policy is ElementPolicy.UNTRACKED:
            replace_array_elements(clone, self._copy_record)
        else:
            replace_array_elements(clone, self._copy_tracked)

    def _copy_record(self, record: np.void) -> np.void:
        """Copy the object fields of a structured array record.

        The record is a value and never enters the identity map; the
        objects it refers to do.
        """
        for name in record.dtype.names or ():
            field_dtype = record.dtype.fields[name][0]
            if not field_dtype.hasobject:
                continue
            value = record[name]
            if isinstance(value, np.void):
                record[name] = self._copy_record(value)
            else:
                record[name] = self.copy(value, True)
        return record

    def _copy_fields(self, original: Any, clone: Any) -> None:
        layout = self._fields.layout(type(original))
        for descriptor in layout.fields:
            value = descriptor.read(original)
            if value is MISSING:
                continue
            # Annotations are not enforced; only a real tuple skips the identity map
            track_identity = descriptor.track_identity or not isinstance(value, tuple)
            descriptor.write(clone, self.copy(value, track_identity))

        instance_dict = getattr(original, "__dict__", None)
        if not instance_dict:
            return
        clone_dict = clone.__dict__
        for name, value in instance_dict.items():
            if name in layout.declared_names:
                continue
            clone_dict[name] = self.copy(value, True)
