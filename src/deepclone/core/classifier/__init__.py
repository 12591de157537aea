"""Type classification: immutable registry, copy constructors, callable policy."""

from deepclone.core.classifier.constructors import (
    CopyConstructor,
    CopyConstructorRegistry,
    get_constructors,
    register_copy_constructor,
)
from deepclone.core.classifier.core import (
    CALLABLE_REFERENCE_TYPES,
    ImmutableTypeRegistry,
    default_immutable_types,
    get_registry,
    immutable,
    is_callable_reference,
    is_value_type,
)

__all__ = [
    # Immutable registry
    "ImmutableTypeRegistry",
    "default_immutable_types",
    "get_registry",
    "immutable",
    "is_value_type",
    # Callables
    "CALLABLE_REFERENCE_TYPES",
    "is_callable_reference",
    # Copy constructors
    "CopyConstructor",
    "CopyConstructorRegistry",
    "get_constructors",
    "register_copy_constructor",
]
