"""Type classification registry and decorator.

Usage:
    @immutable
    @dataclass(frozen=True, slots=True)
    class Money:
        amount: Decimal
        currency: str

    get_registry().is_deeply_immutable(Money)  # True
    get_registry().is_deeply_immutable(Money | None)  # True
"""

from __future__ import annotations

import datetime
import decimal
import enum
import fractions
import functools
import ipaddress
import logging
import pathlib
import re
import threading
import types
import typing
import uuid
import zoneinfo
from collections.abc import Callable, Iterable, Iterator
from typing import Any, overload

import numpy as np

logger = logging.getLogger(__name__)

# Checked before the registry lookup; cheaper than hashing into a large set.
_PRIMITIVES: frozenset[type] = frozenset({bool, int, float, complex})

_SEALED_IMMUTABLE: tuple[type, ...] = (
    types.NoneType,
    str,
    bytes,
    decimal.Decimal,
    fractions.Fraction,
    range,
    types.EllipsisType,
    types.NotImplementedType,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    datetime.timezone,
    zoneinfo.ZoneInfo,
    uuid.UUID,
    pathlib.PurePath,
    pathlib.PurePosixPath,
    pathlib.PureWindowsPath,
    pathlib.Path,
    pathlib.PosixPath,
    pathlib.WindowsPath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    re.Pattern,
    types.CodeType,
)

CALLABLE_REFERENCE_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    functools.partial,
)
"""Function references. Their captured state is never duplicated."""


def _numpy_scalar_types() -> Iterator[type]:
    """Yield every numpy scalar type that cannot hold a Python reference.

    Walks the ``np.generic`` hierarchy instead of a fixed list so new
    scalar types of the installed numpy release are picked up.
    """
    pending: list[type] = [np.generic]
    while pending:
        scalar_type = pending.pop()
        pending.extend(scalar_type.__subclasses__())
        if issubclass(scalar_type, (np.void, np.object_)):
            continue
        yield scalar_type


def default_immutable_types() -> list[type]:
    """Return the types every registry starts with (primitives included)."""
    return [*_PRIMITIVES, *_SEALED_IMMUTABLE, *_numpy_scalar_types()]


def _optional_of(tp: type) -> Any | None:
    """Build ``tp | None``, or None when the union cannot be formed."""
    if tp is types.NoneType:
        return None
    try:
        return tp | None
    except TypeError:
        return None


def _qualified_name(tp: Any) -> str:
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


class ImmutableTypeRegistry:
    """Set of types whose instances can be shared between a graph and its copy.

    A type is deeply immutable when no mutation of an instance can be
    observed through any reference to it. Beyond plain membership the
    registry answers for enums (by rule) and for annotation forms built
    only from immutable parts: ``T | None``, unions, ``Literal``,
    ``Annotated``, ``Final``, ``tuple[...]`` and ``frozenset[...]``.

    Membership is monotonic. Writers publish a new frozenset snapshot
    under a lock, readers never lock.

    Args:
        types_: Initial members. ``T | None`` is added for each of them.
    """

    def __init__(self, types_: Iterable[type] = ()) -> None:
        self._lock = threading.Lock()
        self._types: frozenset[Any] = frozenset()
        self._add(types_, with_optional=True)

    def _add(self, entries: Iterable[Any], *, with_optional: bool) -> None:
        additions: set[Any] = set()
        for entry in entries:
            additions.add(entry)
            if with_optional:
                optional = _optional_of(entry)
                if optional is not None:
                    additions.add(optional)
        with self._lock:
            self._types = self._types | additions

    def register(self, cls: type) -> type:
        """Register a class as deeply immutable.

        Args:
            cls: Class whose instances never expose an observable mutation.

        Returns:
            The class unchanged.

        Raises:
            TypeError: If cls is not a class.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered as immutable, got {cls!r}")
        if cls not in self._types:
            self._add((cls,), with_optional=True)
            logger.debug("Registered deeply immutable type %s", _qualified_name(cls))
        return cls

    def is_deeply_immutable(self, tp: Any) -> bool:
        """Check whether a runtime type or declared annotation is deeply immutable.

        Args:
            tp: A class, or a field annotation such as ``int | None``.

        Returns:
            True if instances can be returned without copying.
        """
        if tp is None:
            tp = types.NoneType
        try:
            if tp in _PRIMITIVES or tp in self._types:
                return True
        except TypeError:
            # Unhashable annotation, e.g. Annotated[int, {"unit": "s"}]
            return self._derive(tp)
        if isinstance(tp, type):
            return issubclass(tp, enum.Enum)
        if self._derive(tp):
            self._add((tp,), with_optional=False)
            return True
        return False

    def _derive(self, annotation: Any) -> bool:
        origin = typing.get_origin(annotation)
        if origin is None:
            return False
        args = typing.get_args(annotation)
        if origin is typing.Literal:
            return all(self.is_deeply_immutable(type(value)) for value in args)
        if origin in (typing.Annotated, typing.Final, typing.ClassVar):
            return bool(args) and self.is_deeply_immutable(args[0])
        if origin in (typing.Union, types.UnionType):
            return all(self.is_deeply_immutable(arg) for arg in args)
        if origin in (tuple, frozenset):
            members = [arg for arg in args if arg is not Ellipsis]
            return bool(members) and all(self.is_deeply_immutable(arg) for arg in members)
        return False

    def __contains__(self, tp: object) -> bool:
        return tp in self._types

    def __len__(self) -> int:
        return len(self._types)


def is_value_type(declared: Any) -> bool:
    """Check whether a declared type is tuple-like.

    Tuples are rebuilt rather than mutated in place, so a slot declared as
    one is copied without consulting the identity map.

    Args:
        declared: Field annotation.

    Returns:
        True for ``tuple``, ``tuple[...]`` and NamedTuple classes.
    """
    origin = typing.get_origin(declared) or declared
    return isinstance(origin, type) and issubclass(origin, tuple)


def is_callable_reference(value: object) -> bool:
    """Check whether a value is a function reference (copied as None)."""
    return isinstance(value, CALLABLE_REFERENCE_TYPES)


# Module-level registry instance
_registry = ImmutableTypeRegistry(default_immutable_types())


def get_registry() -> ImmutableTypeRegistry:
    """Access the global immutable type registry.

    Returns:
        The process-wide ImmutableTypeRegistry instance.
    """
    return _registry


@overload
def immutable(cls: type) -> type: ...


@overload
def immutable(cls: None = None) -> Callable[[type], type]: ...


def immutable(cls: type | None = None) -> type | Callable[[type], type]:
    """Register a class as deeply immutable in the global registry.

    Supports both forms:
        @immutable      # bare decorator
        @immutable()    # parenthesized

    Instances of registered classes are returned by ``deep_copy`` as-is,
    and fields declared with the class are never traversed.

    Args:
        cls: The class to register, or None if called with parentheses.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If applied to something that is not a class.
    """

    def decorator(c: type) -> type:
        return _registry.register(c)

    if cls is None:
        return decorator
    else:
        return decorator(cls)
