"""Field enumeration: per-type descriptors of the fields that need deep copying."""

from deepclone.core.fields.core import FieldCache, declared_fields, get_field_cache
from deepclone.core.fields.models import FieldDescriptor, FieldLayout, FieldStorage

__all__ = [
    # Models
    "FieldDescriptor",
    "FieldLayout",
    "FieldStorage",
    # Core
    "FieldCache",
    "declared_fields",
    "get_field_cache",
]
