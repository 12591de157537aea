"""Core functionalities: classification, identity, field layout, array replication.

Architecture Note:
    core/ contains the building blocks of a copy: process-wide registries
    and caches that are only ever added to, plus pure element-replacement
    functions. The stateful, per-session traversal lives in engine/.
"""

from deepclone.core.arrays import (
    ElementPolicy,
    element_policy,
    replace_array_elements,
    replace_list_items,
    replace_mapping_items,
    replace_set_items,
)
from deepclone.core.classifier import (
    CopyConstructorRegistry,
    ImmutableTypeRegistry,
    get_constructors,
    get_registry,
    immutable,
    is_callable_reference,
    is_value_type,
    register_copy_constructor,
)
from deepclone.core.fields import (
    FieldCache,
    FieldDescriptor,
    FieldLayout,
    FieldStorage,
    get_field_cache,
)
from deepclone.core.identity import MISSING, IdentityMap
from deepclone.core.types import Clone

__all__ = [
    # Types
    "Clone",
    # Classifier
    "ImmutableTypeRegistry",
    "get_registry",
    "immutable",
    "is_value_type",
    "is_callable_reference",
    "CopyConstructorRegistry",
    "get_constructors",
    "register_copy_constructor",
    # Identity
    "IdentityMap",
    "MISSING",
    # Fields
    "FieldCache",
    "FieldDescriptor",
    "FieldLayout",
    "FieldStorage",
    "get_field_cache",
    # Arrays
    "ElementPolicy",
    "element_policy",
    "replace_array_elements",
    "replace_list_items",
    "replace_mapping_items",
    "replace_set_items",
]
