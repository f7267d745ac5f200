"""
dynoconf - Serializable configuration for pooled connection factories

Capture a live pool factory as a type name plus property map, rebuild an
equivalent factory from that map, and compare configurations by value.
"""

from dynoconf.core.descriptor import CUSTOM_POOL_PROPS_KEY, ConfigurationDescriptor
from dynoconf.core.factory import PooledConnectionFactory
from dynoconf.core.registry import (
    FactoryRegistry,
    get_factory_registry,
    set_factory_registry,
    register_factory,
)
from dynoconf.core.decorators import (
    FactoryDecorator,
    DecoratorRegistry,
    get_decorator_registry,
    set_decorator_registry,
)
from dynoconf.core.settings import (
    DescriptorSettings,
    get_settings,
    set_settings,
    settings_from_env,
)
from dynoconf.core.properties import PropertyAccessor, property_table
from dynoconf.core.exceptions import (
    DynoConfError,
    InstantiationError,
    FactoryNotRegisteredError,
    FactoryAlreadyRegisteredError,
    ConfigurationError,
)

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "ConfigurationDescriptor",
    "PooledConnectionFactory",
    "PropertyAccessor",
    "property_table",
    "CUSTOM_POOL_PROPS_KEY",

    # Registries
    "FactoryRegistry",
    "get_factory_registry",
    "set_factory_registry",
    "register_factory",
    "FactoryDecorator",
    "DecoratorRegistry",
    "get_decorator_registry",
    "set_decorator_registry",

    # Settings
    "DescriptorSettings",
    "get_settings",
    "set_settings",
    "settings_from_env",

    # Exceptions
    "DynoConfError",
    "InstantiationError",
    "FactoryNotRegisteredError",
    "FactoryAlreadyRegisteredError",
    "ConfigurationError",
]
