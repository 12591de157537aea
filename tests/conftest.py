"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from deepclone import CopyConstructorRegistry, DeepCopyContext, FieldCache, ImmutableTypeRegistry
from deepclone.core.classifier import default_immutable_types


@pytest.fixture
def registry():
    """Fresh ImmutableTypeRegistry with the default members."""
    return ImmutableTypeRegistry(default_immutable_types())


@pytest.fixture
def field_cache(registry):
    """FieldCache bound to the fresh registry."""
    return FieldCache(registry)


@pytest.fixture
def context(registry, field_cache):
    """DeepCopyContext isolated from the process-wide registries."""
    return DeepCopyContext(
        registry=registry, constructors=CopyConstructorRegistry(), field_cache=field_cache
    )


@dataclass(eq=False)
class FixtureNode:
    value: int
    next: "FixtureNode | None" = None
    payload: list[int] = field(default_factory=list)


@pytest.fixture
def node_cls():
    return FixtureNode
