"""Core pooled connection factory base class for dynoconf"""

import logging
from abc import ABC, abstractmethod

from attrs import define, field

from dynoconf.core.descriptor import ConfigurationDescriptor


@define
class PooledConnectionFactory(ABC):
    """Abstract base class for pooled connection factories

    Concrete factories (SQLAlchemy engines, driver-native pools, etc.) inherit
    from this class. Their public attrs fields are the configuration that
    descriptors extract and rebuild, so every subclass must be constructible
    without arguments. Runtime state belongs in private (underscore) fields.
    """

    # Runtime state (mutable, managed internally)
    _logger: logging.Logger = field(init=False, repr=False, eq=False)
    _initialized: bool = field(default=False, init=False)
    _closed: bool = field(default=False, init=False)

    def __attrs_post_init__(self):
        """Post-initialization setup called by attrs after __init__"""
        self._logger = logging.getLogger(f"dynoconf.adapters.{self.service_type}")
        self._logger.debug(f"Created {self.service_type} pool factory")

    @property
    @abstractmethod
    def service_type(self):
        """Short service identifier used in logger names (e.g. ``sqlalchemy``)"""

    @abstractmethod
    async def initialize(self):
        """
        Create the underlying connection pool

        Should be idempotent and set ``self._initialized = True`` on success.
        """

    @abstractmethod
    async def close(self):
        """
        Release the underlying connection pool

        Should be idempotent and set ``self._closed = True``.
        """

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_initialized(self) -> bool:
        return self._initialized

    def is_closed(self) -> bool:
        return self._closed

    def describe(self) -> ConfigurationDescriptor:
        """
        Capture this factory's configuration as a descriptor

        Returns:
            Type name and extracted property map of this factory
        """
        return ConfigurationDescriptor.from_factory(self)

    def __repr__(self) -> str:
        if self._closed:
            status = "closed"
        elif self._initialized:
            status = "initialized"
        else:
            status = "uninitialized"

        return f"{self.__class__.__name__}(service_type='{self.service_type}', status='{status}')"
