"""Pure functions replacing array and container elements with their copies.

Every function receives a shallow clone whose slots still refer to the
original elements, plus the copy function to apply, and replaces each
element in place. Shape and per-dimension extents are never changed.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping, MutableSequence, MutableSet, Sequence
from typing import Any

import numpy as np

from deepclone.core.arrays.models import ElementPolicy
from deepclone.core.classifier import ImmutableTypeRegistry

type ElementCopier = Callable[[Any], Any]


def element_policy(dtype: np.dtype, registry: ImmutableTypeRegistry) -> ElementPolicy:
    """Decide how the elements of an array with this dtype are copied.

    Args:
        dtype: Array dtype.
        registry: Classifier for the dtype's scalar type.

    Returns:
        SHALLOW for dtypes holding no Python objects, UNTRACKED for
        structured records with object fields, TRACKED for object arrays.
    """
    if not dtype.hasobject or registry.is_deeply_immutable(dtype.type):
        return ElementPolicy.SHALLOW
    if dtype.names is not None:
        return ElementPolicy.UNTRACKED
    return ElementPolicy.TRACKED


def _replace_dimension(
    array: np.ndarray,
    func: ElementCopier,
    dimension: int,
    counts: Sequence[int],
    indices: list[int],
) -> None:
    length = counts[dimension]
    if dimension < len(counts) - 1:
        for t in range(length):
            indices[dimension] = t
            _replace_dimension(array, func, dimension + 1, counts, indices)
    else:
        # Innermost dimension is contiguous in C order
        for t in range(length):
            indices[dimension] = t
            index = tuple(indices)
            array[index] = func(array[index])


def replace_array_elements(array: np.ndarray, func: ElementCopier) -> None:
    """Replace every element of an ndarray of any rank with func(element).

    Rank 1 is a single pass. Higher ranks walk the dimensions outer to
    inner with an accumulated index vector.

    Args:
        array: Shallow clone to update in place.
        func: Copy function applied to each element.
    """
    if array.ndim == 0:
        # 0-d arrays are always contiguous, reshape gives a writable view
        flat = array.reshape(1)
        flat[0] = func(flat[0])
    elif array.ndim == 1:
        for t in range(array.shape[0]):
            array[t] = func(array[t])
    else:
        indices = [0] * array.ndim
        _replace_dimension(array, func, 0, array.shape, indices)


def replace_list_items(items: MutableSequence[Any], func: ElementCopier) -> None:
    """Rank-1 pass over a list or deque."""
    for t in range(len(items)):
        items[t] = func(items[t])


def replace_mapping_items(mapping: MutableMapping[Any, Any], func: ElementCopier) -> None:
    """Replace keys and values of a mapping, keeping insertion order.

    Keys are copied too, so a copied key can differ in identity (and hash)
    from the original one; the mapping is therefore rebuilt.
    """
    entries = list(mapping.items())
    mapping.clear()
    for key, value in entries:
        mapping[func(key)] = func(value)


def replace_set_items(items: MutableSet[Any], func: ElementCopier) -> None:
    """Replace the members of a set with their copies."""
    members = list(items)
    items.clear()
    for member in members:
        items.add(func(member))
