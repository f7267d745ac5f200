"""Library-wide settings for descriptor extraction and building"""

import os
from typing import FrozenSet, Optional

from attrs import define, field

DEFAULT_SKIPPED_PROPERTY_NAMES = frozenset({"loginTimeout"})

DEFAULT_CUSTOM_POOL_PROPS_KEY = "customPoolProps"


@define(frozen=True)
class DescriptorSettings:
    """Library-wide settings for descriptor extraction and building with validation"""

    skipped_property_names: FrozenSet[str] = field(
        default=DEFAULT_SKIPPED_PROPERTY_NAMES, converter=frozenset
    )
    custom_pool_props_key: str = field(default=DEFAULT_CUSTOM_POOL_PROPS_KEY)

    def __attrs_post_init__(self):
        """Validation after all fields are set"""
        if not isinstance(self.custom_pool_props_key, str) or not self.custom_pool_props_key.strip():
            raise ValueError("custom_pool_props_key must be a non-empty string")

        for name in self.skipped_property_names:
            if not isinstance(name, str) or not name:
                raise ValueError("skipped property names must be non-empty strings")

    def is_skipped(self, property_name: str) -> bool:
        return property_name in self.skipped_property_names


def settings_from_env() -> DescriptorSettings:
    """
    Build settings from environment variables

    Environment Variables:
        DYNOCONF_SKIPPED_PROPERTIES: comma separated names added to the default skip-list
        DYNOCONF_CUSTOM_POOL_PROPS_KEY: key holding vendor pool overrides in mappings
    """
    skipped = set(DEFAULT_SKIPPED_PROPERTY_NAMES)
    extra = os.environ.get("DYNOCONF_SKIPPED_PROPERTIES", "")
    skipped.update(name.strip() for name in extra.split(",") if name.strip())

    return DescriptorSettings(
        skipped_property_names=skipped,
        custom_pool_props_key=os.environ.get(
            "DYNOCONF_CUSTOM_POOL_PROPS_KEY", DEFAULT_CUSTOM_POOL_PROPS_KEY
        ),
    )


# Global settings management
_global_settings: Optional[DescriptorSettings] = None


def get_settings() -> DescriptorSettings:
    """Get the global settings, reading the environment on first use"""
    global _global_settings
    if _global_settings is None:
        _global_settings = settings_from_env()
    return _global_settings


def set_settings(settings: Optional[DescriptorSettings]):
    """Set the global settings (None re-reads the environment on next use)"""
    global _global_settings
    _global_settings = settings
