"""Configuration descriptor for pooled connection factories"""

import logging
from typing import Any, Dict, Mapping, Optional

import attrs
from attrs import define, field

from dynoconf.core.decorators import DecoratorRegistry, get_decorator_registry
from dynoconf.core.exceptions import ConfigurationError, InstantiationError
from dynoconf.core.properties import property_table, string_form
from dynoconf.core.registry import FactoryRegistry, get_factory_registry
from dynoconf.core.settings import (
    DEFAULT_CUSTOM_POOL_PROPS_KEY as CUSTOM_POOL_PROPS_KEY,
    DescriptorSettings,
    get_settings,
)

logger = logging.getLogger("dynoconf.descriptor")


def _non_empty(instance, attribute, value):
    if not value.strip():
        raise ValueError(f"{attribute.name} must be a non-empty string")


@define(eq=False)
class ConfigurationDescriptor:
    """
    Type name plus property map describing a pooled connection factory

    A descriptor is extracted from a live factory with ``from_factory`` and
    turned back into a new, independent factory with ``create_factory``.

    Equality is "configurationally compatible" rather than canonical: two
    descriptors are equal when their type names match and every property
    present in *both* maps has the same string form. Keys present on one side
    only are ignored, so the relation is neither guaranteed symmetric nor
    transitive across descriptors with partially disjoint key sets.

    The hash covers the type name and every property in iteration order, so
    descriptors that are equal under the rule above may still hash
    differently when their key sets differ. Do not rely on descriptors with
    differing key sets collapsing in sets or dict keys.

    Example:
        >>> descriptor = ConfigurationDescriptor.from_factory(factory)
        >>> descriptor.custom_pool_properties["poolSize"] = "20"
        >>> rebuilt = descriptor.create_factory()
    """

    type_name: str = field(
        validator=[attrs.validators.instance_of(str), _non_empty],
        on_setattr=attrs.setters.frozen,
    )
    properties: Dict[str, Any] = field(factory=dict)
    custom_pool_properties: Dict[str, str] = field(factory=dict)

    @classmethod
    def from_factory(
        cls,
        factory: Any,
        registry: Optional[FactoryRegistry] = None,
        settings: Optional[DescriptorSettings] = None,
    ) -> "ConfigurationDescriptor":
        """
        Extract a descriptor from a live pool factory

        Only properties of general types (bool, int, str, sequences) that are
        not on the skip-list are captured. Accessor failures propagate.

        Args:
            factory: Pool factory instance to describe
            registry: Factory registry used to name the type (global by default)
            settings: Skip-list source (global by default)

        Returns:
            A new descriptor holding the factory's current property values
        """
        registry = registry or get_factory_registry()
        settings = settings or get_settings()

        result = cls(registry.name_for(type(factory)))
        for accessor in property_table(type(factory)).values():
            if accessor.extractable and not settings.is_skipped(accessor.name):
                result.properties[accessor.name] = accessor.get(factory)

        logger.debug(
            f"Extracted {len(result.properties)} properties from '{result.type_name}'"
        )
        return result

    @classmethod
    def from_mapping(
        cls,
        type_name: str,
        mapping: Mapping[str, Any],
        settings: Optional[DescriptorSettings] = None,
    ) -> "ConfigurationDescriptor":
        """
        Create a descriptor from a plain (parsed) property mapping

        A nested mapping stored under the custom pool props key is moved into
        ``custom_pool_properties`` with its values rendered as strings. Null
        entries are dropped so they never override a configured property.

        Raises:
            ConfigurationError: If the custom pool props entry is not a mapping
        """
        settings = settings or get_settings()
        key = settings.custom_pool_props_key

        properties = dict(mapping)
        custom = properties.pop(key, None)
        if custom is None:
            custom = {}
        if not isinstance(custom, Mapping):
            raise ConfigurationError(key, f"expected a mapping, got {type(custom).__name__}")

        return cls(
            type_name,
            properties=properties,
            custom_pool_properties={
                str(name): string_form(value)
                for name, value in custom.items()
                if value is not None
            },
        )

    def to_mapping(self, settings: Optional[DescriptorSettings] = None) -> Dict[str, Any]:
        """Convert the property maps to a plain dictionary for serialization"""
        settings = settings or get_settings()
        result = dict(self.properties)
        if self.custom_pool_properties:
            result[settings.custom_pool_props_key] = dict(self.custom_pool_properties)
        return result

    def create_factory(
        self,
        registry: Optional[FactoryRegistry] = None,
        decorators: Optional[DecoratorRegistry] = None,
        settings: Optional[DescriptorSettings] = None,
    ) -> Any:
        """
        Build a new pool factory from this descriptor

        Custom pool properties override same-named entries of ``properties``.
        Entries without a matching writable property, entries with ``None``
        values and entries on the skip-list are skipped.

        Returns:
            The configured factory after it has passed through the decoration hooks

        Raises:
            InstantiationError: If the type name cannot be resolved or constructed
            ConfigurationError: If a property value is rejected
        """
        registry = registry or get_factory_registry()
        decorators = decorators or get_decorator_registry()
        settings = settings or get_settings()

        constructor = registry.resolve(self.type_name)
        try:
            result = constructor()
        except TypeError as e:
            logger.error(f"Failed to instantiate pool factory '{self.type_name}': {e}")
            raise InstantiationError(
                f"Pool factory '{self.type_name}' has no usable default constructor: {e}"
            ) from e

        table = property_table(type(result))
        all_props = dict(self.properties)
        all_props.update(self.custom_pool_properties)
        for name, value in all_props.items():
            if settings.is_skipped(name):
                logger.debug(f"Skipping unsupported property '{name}'")
                continue

            accessor = table.get(name)
            if accessor is None or not accessor.writable or value is None:
                continue

            try:
                accessor.set(result, value)
            except (ValueError, TypeError) as e:
                logger.error(
                    f"Rejected property '{name}' for pool factory '{self.type_name}': {e}"
                )
                raise ConfigurationError(name, str(e)) from e

        return decorators.decorate(result)

    def add_property_synonym(self, original_name: str, synonym: str):
        """
        Make ``synonym`` carry the same value as ``original_name``

        The original value is copied to the synonym first; then, if the
        synonym is present (including just now), its value is copied back to
        the original name.
        """
        if original_name in self.properties:
            self.properties[synonym] = self.properties[original_name]
        if synonym in self.properties:
            self.properties[original_name] = self.properties[synonym]

    def add_property_synonyms(self, synonyms: Mapping[str, str]):
        for original_name, synonym in synonyms.items():
            self.add_property_synonym(original_name, synonym)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ConfigurationDescriptor):
            return NotImplemented
        return self._equals_by_properties(other)

    def _equals_by_properties(self, other: "ConfigurationDescriptor") -> bool:
        if self.type_name != other.type_name:
            return False
        for name, value in self.properties.items():
            if name not in other.properties:
                continue
            if string_form(value) != string_form(other.properties[name]):
                return False
        return True

    def __hash__(self):
        joined = "".join(
            f"{name}{string_form(value)}" for name, value in self.properties.items()
        )
        return hash((self.type_name, joined))
