"""Configuration settings using Pydantic Settings.

Extends the process-wide registries from the environment, so integrators
can declare their own immutable types and copy constructors without code.

Usage:
    from deepclone.config import CopySettings, apply_settings

    # Load from environment variables (DEEPCLONE_*)
    apply_settings()

    # Or pass explicit values
    apply_settings(CopySettings(immutable_types=["myapp.money:Money"]))
"""

from __future__ import annotations

import logging
import pkgutil

try:
    from pydantic import field_validator
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install deepclone[config]"
    ) from e

from deepclone.core.classifier import (
    CopyConstructorRegistry,
    ImmutableTypeRegistry,
    get_constructors,
    get_registry,
)

logger = logging.getLogger(__name__)


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Registry extensions applied at startup.

    Names use ``pkgutil.resolve_name`` syntax: ``package.module:Qualified.Name``
    or ``package.module.Name``.

    Attributes:
        immutable_types: Types to register as deeply immutable.
        copy_constructors: Type name -> name of the callable copying it.

    Environment Variables:
        DEEPCLONE_IMMUTABLE_TYPES (JSON list)
        DEEPCLONE_COPY_CONSTRUCTORS (JSON object)
    """

    model_config = SettingsConfigDict(
        env_prefix="DEEPCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    immutable_types: list[str] = []
    copy_constructors: dict[str, str] = {}

    @field_validator("immutable_types")
    @classmethod
    def _names_not_blank(cls, names: list[str]) -> list[str]:
        stripped = [name.strip() for name in names]
        if any(not name for name in stripped):
            raise ValueError("immutable type names must not be blank")
        return stripped


def apply_settings(
    settings: CopySettings | None = None,
    registry: ImmutableTypeRegistry | None = None,
    constructors: CopyConstructorRegistry | None = None,
) -> None:
    """Register the types and constructors named by settings.

    Args:
        settings: Settings to apply (default: loaded from the environment).
        registry: Target immutable registry (default: process-wide).
        constructors: Target constructor registry (default: process-wide).

    Raises:
        ImportError: If a module named in settings cannot be imported.
        AttributeError: If a named attribute does not exist.
        TypeError: If an immutable entry is not a class or a constructor
            is not callable.
    """
    settings = settings if settings is not None else CopySettings()
    registry = registry if registry is not None else get_registry()
    constructors = constructors if constructors is not None else get_constructors()

    for name in settings.immutable_types:
        registry.register(pkgutil.resolve_name(name))
    for type_name, constructor_name in settings.copy_constructors.items():
        constructors.register(
            pkgutil.resolve_name(type_name), pkgutil.resolve_name(constructor_name)
        )

    logger.info(
        "Applied copy settings: %d immutable types, %d copy constructors",
        len(settings.immutable_types),
        len(settings.copy_constructors),
    )
