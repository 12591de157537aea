"""Public deep copy entry point."""

from __future__ import annotations

import logging

from deepclone.core.types import Clone
from deepclone.engine.context import DeepCopyContext

logger = logging.getLogger(__name__)


def deep_copy[T](original: T) -> Clone[T] | None:
    """Deep copy an object graph.

    Each call is an independent session with its own identity map: shared
    references and cycles inside ``original`` are reproduced in the copy,
    nothing is shared with copies made by other calls.

    Args:
        original: Root of the graph to copy.

    Returns:
        The copy, ``original`` itself when it is deeply immutable, None when
        it is None or a function reference.

    Raises:
        TypeError: If an object in the graph cannot be shallow cloned
            (locks, generators, open handles).
        RecursionError: If the graph is deeper than the interpreter stack.
    """
    if original is None:
        return None
    context = DeepCopyContext()
    clone = context.copy(original, True)
    logger.debug(
        "Deep copied %s, %d objects tracked", type(original).__qualname__, len(context.visited)
    )
    return clone
