"""Configuration module using Pydantic Settings.

Provides typed configuration for the registries with environment variable support.

Usage:
    from deepclone.config import CopySettings, apply_settings

    apply_settings(CopySettings(immutable_types=["myapp.money:Money"]))
"""

from deepclone.config.settings import CopySettings, apply_settings

__all__ = [
    "CopySettings",
    "apply_settings",
]
