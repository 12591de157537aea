"""Copy engine: per-session traversal and the deep_copy entry point."""

from deepclone.engine.api import deep_copy
from deepclone.engine.context import DeepCopyContext

__all__ = [
    "DeepCopyContext",
    "deep_copy",
]
