# Custom Exceptions
class DynoConfError(Exception):
    """Base exception for dynoconf errors"""

    pass


class InstantiationError(DynoConfError):
    """Raised when a pool factory type cannot be resolved or constructed"""

    pass


class FactoryNotRegisteredError(InstantiationError):
    """Raised when no constructor is registered under the requested type name"""

    pass


class FactoryAlreadyRegisteredError(DynoConfError):
    """Raised when a type name is already bound to a different constructor"""

    pass


class ConfigurationError(DynoConfError):
    """Raised when a property value is rejected while building a pool factory"""

    def __init__(self, property_name: str, reason: str):
        self.property_name = property_name
        self.reason = reason
        super().__init__(
            f"Incorrect configuration item: the property {property_name} "
            f"of the pool factory, because {reason}"
        )
