"""Element copy policy for arrays and containers."""

from __future__ import annotations

from enum import Enum, auto


class ElementPolicy(Enum):
    """How the elements of a shallow-cloned array are brought up to a deep copy."""

    SHALLOW = auto()  # elements deeply immutable, the shallow clone is final
    UNTRACKED = auto()  # value-like elements, copied without the identity map
    TRACKED = auto()  # references, copied through the identity map

    @property
    def track_identity(self) -> bool:
        """Whether element copies consult the identity map."""
        return self is ElementPolicy.TRACKED
