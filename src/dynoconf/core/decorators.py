"""Post-construction decoration hooks for freshly built pool factories"""

import logging
from typing import Any, List, Optional, Protocol, runtime_checkable

from attrs import define, field


@runtime_checkable
class FactoryDecorator(Protocol):
    """Contract implemented by decoration hooks

    ``factory_type`` selects which factories the hook applies to;
    ``decorate`` returns the (possibly wrapped) factory.
    """

    factory_type: type

    def decorate(self, factory: Any) -> Any: ...


@define
class DecoratorRegistry:
    """Ordered collection of decoration hooks"""

    _decorators: List[FactoryDecorator] = field(factory=list, init=False)
    _logger: logging.Logger = field(init=False)

    def __attrs_post_init__(self):
        self._logger = logging.getLogger("dynoconf.decorators")

    def register(self, decorator: FactoryDecorator):
        if not isinstance(decorator, FactoryDecorator):
            raise TypeError(f"{decorator!r} does not implement FactoryDecorator")
        self._decorators.append(decorator)
        self._logger.debug(
            f"Registered decorator {type(decorator).__name__} "
            f"for {decorator.factory_type.__name__}"
        )

    def list_decorators(self) -> List[FactoryDecorator]:
        return list(self._decorators)

    def decorate(self, factory: Any) -> Any:
        """Apply every matching hook, in registration order"""
        result = factory
        for decorator in self._decorators:
            if isinstance(result, decorator.factory_type):
                self._logger.debug(
                    f"Decorating {type(result).__name__} with {type(decorator).__name__}"
                )
                result = decorator.decorate(result)
        return result


# Global registry management
_global_decorators: Optional[DecoratorRegistry] = None


def get_decorator_registry() -> DecoratorRegistry:
    """Get the global decorator registry"""
    global _global_decorators
    if _global_decorators is None:
        _global_decorators = DecoratorRegistry()
    return _global_decorators


def set_decorator_registry(registry: DecoratorRegistry):
    """Set the global decorator registry"""
    global _global_decorators
    _global_decorators = registry
