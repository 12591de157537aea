"""Array replication: rank-aware element replacement for arrays and containers."""

from deepclone.core.arrays.models import ElementPolicy
from deepclone.core.arrays.operations import (
    ElementCopier,
    element_policy,
    replace_array_elements,
    replace_list_items,
    replace_mapping_items,
    replace_set_items,
)

__all__ = [
    # Models
    "ElementPolicy",
    # Operations
    "ElementCopier",
    "element_policy",
    "replace_array_elements",
    "replace_list_items",
    "replace_mapping_items",
    "replace_set_items",
]
