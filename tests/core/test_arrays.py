"""Tests for array and container element replacement.

Critical Invariants:
- Shape and per-dimension extents are preserved
- Elements are visited in C (storage) order
- Element policy follows the dtype's element type
"""

from collections import OrderedDict

import numpy as np
import pytest

from deepclone import ElementPolicy
from deepclone.core.arrays import (
    element_policy,
    replace_array_elements,
    replace_list_items,
    replace_mapping_items,
    replace_set_items,
)


class Box:
    def __init__(self, value):
        self.value = value


# Element policy


@pytest.mark.parametrize("dtype", [np.float64, np.int32, np.bool_, "U8", "datetime64[s]"])
def test_numeric_dtypes_are_shallow(registry, dtype):
    assert element_policy(np.dtype(dtype), registry) is ElementPolicy.SHALLOW


def test_record_without_objects_is_shallow(registry):
    dtype = np.dtype([("x", np.float64), ("y", np.int64)])

    assert element_policy(dtype, registry) is ElementPolicy.SHALLOW


def test_record_with_objects_is_untracked(registry):
    dtype = np.dtype([("id", np.int64), ("payload", object)])

    assert element_policy(dtype, registry) is ElementPolicy.UNTRACKED


def test_object_dtype_is_tracked(registry):
    assert element_policy(np.dtype(object), registry) is ElementPolicy.TRACKED


def test_only_tracked_policy_tracks_identity():
    assert ElementPolicy.TRACKED.track_identity
    assert not ElementPolicy.UNTRACKED.track_identity
    assert not ElementPolicy.SHALLOW.track_identity


# ndarray replacement


def _object_array(shape):
    array = np.empty(shape, dtype=object)
    for index, position in enumerate(np.ndindex(*shape)):
        array[position] = Box(index)
    return array


def test_rank_one_replaces_every_element():
    array = _object_array((4,))

    replace_array_elements(array, lambda box: Box(box.value * 10))

    assert [box.value for box in array] == [0, 10, 20, 30]


@pytest.mark.parametrize("shape", [(2, 3), (2, 2, 2), (3, 1, 2, 1)])
def test_rank_n_visits_elements_in_storage_order(shape):
    """CRITICAL: Multi-dimensional walk is outer to inner (C order)."""
    array = _object_array(shape)
    seen = []

    def record(box):
        seen.append(box.value)
        return Box(-box.value)

    replace_array_elements(array, record)

    assert seen == list(range(array.size))
    assert array.shape == shape
    assert [box.value for box in array.flat] == [-v for v in range(array.size)]


def test_rank_zero_array():
    array = np.empty((), dtype=object)
    array[()] = Box(7)

    replace_array_elements(array, lambda box: Box(box.value + 1))

    assert array.shape == ()
    assert array[()].value == 8


def test_empty_dimension_is_a_no_op():
    array = np.empty((2, 0, 3), dtype=object)
    calls = []

    replace_array_elements(array, calls.append)

    assert calls == []


# Builtin containers


def test_list_items_replaced_in_place():
    items = [Box(1), Box(2)]
    originals = list(items)

    replace_list_items(items, lambda box: Box(box.value))

    assert [box.value for box in items] == [1, 2]
    assert all(new is not old for new, old in zip(items, originals))


def test_mapping_keys_and_values_replaced_keeping_order():
    mapping = OrderedDict([("b", 1), ("a", 2)])

    replace_mapping_items(mapping, lambda item: item * 2)

    assert list(mapping.items()) == [("bb", 2), ("aa", 4)]
    assert isinstance(mapping, OrderedDict)


def test_set_members_replaced():
    members = {1, 2, 3}

    replace_set_items(members, lambda item: item + 10)

    assert members == {11, 12, 13}
