"""Identity map: session-scoped original -> clone mapping by object identity."""

from deepclone.core.identity.models import MISSING, IdentityMap

__all__ = ["IdentityMap", "MISSING"]
