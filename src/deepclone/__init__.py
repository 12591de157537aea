"""deepclone: identity-preserving deep copy of arbitrary object graphs.

Usage:
    from deepclone import deep_copy, immutable

    @immutable
    @dataclass(frozen=True)
    class Currency:
        code: str

    @dataclass
    class Node:
        value: int
        next: "Node | None" = None

    node = Node(1)
    node.next = node
    clone = deep_copy(node)
    assert clone is not node and clone.next is clone
"""

__version__ = "0.1.0"

# Core primitives
from deepclone.core import (
    MISSING,
    Clone,
    CopyConstructorRegistry,
    ElementPolicy,
    FieldCache,
    FieldDescriptor,
    FieldStorage,
    IdentityMap,
    ImmutableTypeRegistry,
    get_constructors,
    get_field_cache,
    get_registry,
    immutable,
    is_callable_reference,
    register_copy_constructor,
)

# Engine
from deepclone.engine import (
    DeepCopyContext,
    deep_copy,
)

__all__ = [
    # Version
    "__version__",
    # Engine
    "deep_copy",
    "DeepCopyContext",
    # Classifier
    "immutable",
    "get_registry",
    "ImmutableTypeRegistry",
    "is_callable_reference",
    "register_copy_constructor",
    "get_constructors",
    "CopyConstructorRegistry",
    # Fields
    "get_field_cache",
    "FieldCache",
    "FieldDescriptor",
    "FieldStorage",
    # Identity
    "IdentityMap",
    "MISSING",
    # Arrays
    "ElementPolicy",
    # Types
    "Clone",
]
