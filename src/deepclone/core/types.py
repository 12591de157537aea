"""Core type definitions for deepclone."""

type Clone[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Clone[T]` in a return type, the returned graph shares no
mutable sub-object with its source. Mutating one never affects the other.
"""
