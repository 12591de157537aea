"""End-to-end tests: deep copy of whole object graphs.

Critical Invariants:
- Immutable leaves are shared, every mutable sub-object is copied
- Cycles and shared references are reproduced exactly, once per session
- Mutating the copy never affects the original and vice versa
"""

import datetime
import decimal
import enum
from dataclasses import dataclass, field

import numpy as np
from hypothesis import given
from hypothesis import strategies as st

from deepclone import deep_copy, immutable


class Status(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


@immutable
@dataclass(frozen=True)
class Money:
    amount: decimal.Decimal
    currency: str


@dataclass(eq=False)
class Account:
    owner: str
    balance: Money
    history: list[Money] = field(default_factory=list)
    ref: "Account | None" = None


@dataclass(eq=False)
class Item:
    name: str
    tags: list[str] = field(default_factory=list)


json_like = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=5),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=20,
)


def _assert_disjoint(original, clone):
    """Containers are fresh objects, scalar leaves are the same objects."""
    if isinstance(original, list):
        assert clone is not original
        for old, new in zip(original, clone, strict=True):
            _assert_disjoint(old, new)
    elif isinstance(original, dict):
        assert clone is not original
        for key, value in original.items():
            _assert_disjoint(value, clone[key])
    else:
        assert clone is original


# Immutability fast path


@given(
    value=st.one_of(
        st.integers(),
        st.floats(allow_nan=True),
        st.text(),
        st.binary(),
        st.booleans(),
        st.decimals(allow_nan=True),
        st.dates(),
        st.timedeltas(),
        st.sampled_from(Status),
        st.builds(Money, st.decimals(allow_nan=False), st.sampled_from(["EUR", "USD"])),
    )
)
def test_immutable_values_are_returned_as_is(value):
    """CRITICAL: deep_copy(v) is v for every deeply immutable v."""
    assert deep_copy(value) is value


# Value equivalence, identity divergence


@given(value=json_like)
def test_copy_is_equal_but_disjoint(value):
    clone = deep_copy(value)

    assert clone == value
    _assert_disjoint(value, clone)


def test_plain_object_copy_is_equivalent():
    account = Account("ada", Money(decimal.Decimal("10"), "EUR"), history=[])

    clone = deep_copy(account)

    assert clone is not account
    assert clone.owner == account.owner
    assert clone.balance is account.balance  # registered immutable
    assert clone.history == account.history
    assert clone.history is not account.history


# Cycles and sharing


def test_self_cycle_points_to_the_clone(node_cls):
    """CRITICAL: a.next = a copies to clone.next is clone."""
    node = node_cls(1)
    node.next = node

    clone = deep_copy(node)

    assert clone is not node
    assert clone.next is clone


def test_two_node_cycle(node_cls):
    first, second = node_cls(1), node_cls(2)
    first.next, second.next = second, first

    clone = deep_copy(first)

    assert clone.next.next is clone
    assert clone.next is not second


def test_shared_reference_copied_once():
    """CRITICAL: Two fields referencing one object reference one clone."""
    shared = Item("shared", ["x"])
    a = Account("a", Money(decimal.Decimal(1), "EUR"))
    b = Account("b", Money(decimal.Decimal(2), "EUR"))
    a.history = [shared]  # type: ignore[list-item]
    b.history = [shared]  # type: ignore[list-item]

    clone_a, clone_b = deep_copy((a, b))

    assert clone_a.history[0] is clone_b.history[0]
    assert clone_a.history[0] is not shared


def test_shared_reference_between_fields():
    target = Account("target", Money(decimal.Decimal(0), "USD"))
    a = Account("a", target.balance, ref=target)
    b = Account("b", target.balance, ref=target)

    clone_a, clone_b = deep_copy([a, b])

    assert clone_a.ref is clone_b.ref
    assert clone_a.ref is not target


def test_list_with_repeated_element():
    item = Item("repeated")

    clone = deep_copy([item, item, Item("other")])

    assert clone[0] is clone[1]
    assert clone[0] is not clone[2]
    assert clone[0] is not item


# Independent mutation


def test_mutations_do_not_cross(node_cls):
    node = node_cls(1, payload=[1, 2])
    clone = deep_copy(node)

    clone.payload.append(3)
    node.payload.remove(1)

    assert node.payload == [2]
    assert clone.payload == [1, 2, 3]


def test_mutating_copied_dict_leaves_original_untouched():
    original = {"items": [Item("a", ["t"])], "when": datetime.date(2024, 1, 1)}
    clone = deep_copy(original)

    clone["items"][0].tags.append("u")
    clone["items"].append(Item("b"))

    assert original["items"][0].tags == ["t"]
    assert len(original["items"]) == 1
    assert clone["when"] is original["when"]


# Arrays


def test_two_by_three_array_fidelity():
    """CRITICAL: shape kept, repeated element shared in the copy, nothing shared with the original."""
    shared = Item("shared")
    array = np.empty((2, 3), dtype=object)
    for row in range(2):
        for col in range(3):
            array[row, col] = Item(f"{row}{col}")
    array[0, 1] = shared
    array[1, 2] = shared

    clone = deep_copy(array)

    assert clone.shape == (2, 3)
    assert clone[0, 1] is clone[1, 2]
    originals = {id(element) for element in array.flat}
    assert all(id(element) not in originals for element in clone.flat)
    assert [element.name for element in clone.flat] == [element.name for element in array.flat]


def test_array_referencing_itself_through_an_element():
    item = Item("holder")
    array = np.empty(1, dtype=object)
    array[0] = item
    item.tags = array  # type: ignore[assignment]

    clone = deep_copy(array)

    assert clone[0].tags is clone


# Callables


def test_callable_fields_are_emptied():
    item = Item("with callback")
    item.callback = lambda: item.tags.clear()  # type: ignore[attr-defined]

    clone = deep_copy(item)

    assert clone.callback is None  # type: ignore[attr-defined]
    assert item.callback is not None  # type: ignore[attr-defined]
