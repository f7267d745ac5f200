"""Factory registry for pool factory construction by type name"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type

from attrs import define, field

from dynoconf.core.exceptions import (
    FactoryAlreadyRegisteredError,
    FactoryNotRegisteredError,
)

FactoryConstructor = Callable[[], Any]


def qualified_name(cls: type) -> str:
    """Default type name of a factory class: ``module.QualName``"""
    return f"{cls.__module__}.{cls.__qualname__}"


@define
class FactoryRegistry:
    """
    Named constructors for pool factory types

    Target types register a zero-argument constructor under one or more names
    at import time; descriptors resolve their type name here instead of
    loading arbitrary classes.

    Example:
        >>> registry = FactoryRegistry()
        >>> registry.register("hikari", HikariLikeFactory)
        >>> factory = registry.resolve("hikari")()
    """

    _constructors: Dict[str, FactoryConstructor] = field(factory=dict, init=False)
    _canonical_names: Dict[type, str] = field(factory=dict, init=False)
    _logger: logging.Logger = field(init=False)

    def __attrs_post_init__(self):
        self._logger = logging.getLogger("dynoconf.registry")

    def register(
        self,
        name: str,
        constructor: FactoryConstructor,
        factory_type: Optional[type] = None,
    ):
        """Register a constructor under a type name

        Args:
            name: Type name used in descriptors
            constructor: Zero-argument callable returning a new factory
            factory_type: Class produced by the constructor; its first
                registered name becomes the name used for extraction

        Raises:
            FactoryAlreadyRegisteredError: If ``name`` is bound to another constructor
        """
        if not name or not isinstance(name, str):
            raise ValueError("Factory name must be a non-empty string")

        existing = self._constructors.get(name)
        if existing is not None and existing is not constructor:
            raise FactoryAlreadyRegisteredError(
                f"Factory name '{name}' is already registered to {existing!r}"
            )

        self._constructors[name] = constructor
        if factory_type is not None:
            self._canonical_names.setdefault(factory_type, name)
        self._logger.debug(f"Registered pool factory '{name}'")

    def register_class(self, cls: Type[Any], *aliases: str) -> Type[Any]:
        """Register a class under its qualified name plus any aliases"""
        for name in (qualified_name(cls), *aliases):
            self.register(name, cls, factory_type=cls)
        return cls

    def unregister(self, name: str):
        constructor = self._constructors.pop(name, None)
        for cls, canonical in list(self._canonical_names.items()):
            if canonical == name:
                del self._canonical_names[cls]
        if constructor is None:
            self._logger.warning(f"Attempted to unregister unknown pool factory '{name}'")

    def resolve(self, name: str) -> FactoryConstructor:
        """Get the constructor registered under ``name``

        Raises:
            FactoryNotRegisteredError: If nothing is registered under ``name``
        """
        if name not in self._constructors:
            raise FactoryNotRegisteredError(
                f"Pool factory '{name}' is not registered. "
                f"Available factories: {self.list_names()}"
            )
        return self._constructors[name]

    def name_for(self, cls: type) -> str:
        """Name used when extracting a descriptor from an instance of ``cls``"""
        return self._canonical_names.get(cls, qualified_name(cls))

    def list_names(self) -> List[str]:
        return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return name in self._constructors

    def __repr__(self) -> str:
        return f"FactoryRegistry(names={self.list_names()})"


# Global registry management
_global_registry: Optional[FactoryRegistry] = None


def get_factory_registry() -> FactoryRegistry:
    """Get the global factory registry"""
    global _global_registry
    if _global_registry is None:
        _global_registry = FactoryRegistry()
    return _global_registry


def set_factory_registry(registry: FactoryRegistry):
    """Set the global factory registry"""
    global _global_registry
    _global_registry = registry


def register_factory(*aliases: str, registry: Optional[FactoryRegistry] = None):
    """Class decorator registering a pool factory type

    Usage:
        @register_factory("sqlalchemy")
        @define
        class SQLAlchemyPoolFactory(PooledConnectionFactory):
            ...
    """

    def decorator(cls):
        (registry or get_factory_registry()).register_class(cls, *aliases)
        return cls

    return decorator
