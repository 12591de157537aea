"""Identity map for a single copy session.

Usage:
    visited = IdentityMap()
    visited.add(original, clone)
    visited.get(original)  # clone
    visited.get(other)     # MISSING
"""

from __future__ import annotations

from typing import Any, Final


class _MissingType:
    """Sentinel type for absent entries (None is a valid stored value)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _MissingType()


class IdentityMap:
    """Maps original objects to their clones by identity, not equality.

    Keys are ``id(original)``. Each entry also holds the original itself so
    it stays alive for the whole session and its id cannot be reused by an
    unrelated object created mid-copy.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def get(self, original: Any) -> Any:
        """Return the clone registered for original, or MISSING."""
        entry = self._entries.get(id(original))
        if entry is None:
            return MISSING
        return entry[1]

    def add(self, original: Any, clone: Any) -> None:
        """Register the clone produced for original.

        Args:
            original: Object from the source graph.
            clone: Its copy in the produced graph.

        Raises:
            KeyError: If original is already registered.
        """
        key = id(original)
        if key in self._entries:
            raise KeyError(f"{type(original).__name__} at {key:#x} already has a clone")
        self._entries[key] = (original, clone)

    def __contains__(self, original: object) -> bool:
        return id(original) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
