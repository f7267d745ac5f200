"""Shared fixtures and sample pool factories for the dynoconf test suite."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from attrs import define, field

from dynoconf import (
    DecoratorRegistry,
    DescriptorSettings,
    FactoryRegistry,
    PooledConnectionFactory,
)


def _positive(instance, attribute, value):
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive")


@define
class SamplePoolFactory(PooledConnectionFactory):
    url: str = field(default="")
    size: int = field(default=10, validator=_positive)
    max_lifetime: int = field(default=1800)
    auto_commit: bool = field(default=True)
    login_timeout: int = field(default=0)
    schemas: List[str] = field(factory=list)
    options: Dict[str, Any] = field(factory=dict)

    @property
    def service_type(self):
        return "sample"

    async def initialize(self):
        self._initialized = True

    async def close(self):
        self._closed = True


class PropertyPoolFactory:
    """Plain class exposing its configuration through properties."""

    def __init__(self):
        self._max_idle = 4
        self._driver = "sample-driver"

    @property
    def max_idle(self) -> int:
        return self._max_idle

    @max_idle.setter
    def max_idle(self, value):
        if value < 0:
            raise ValueError("maxIdle cannot be negative")
        self._max_idle = value

    @property
    def driver(self) -> str:
        return self._driver


class NeedsArgumentsFactory:
    def __init__(self, url):
        self.url = url


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> DescriptorSettings:
    return DescriptorSettings()


@pytest.fixture
def registry() -> FactoryRegistry:
    registry = FactoryRegistry()
    registry.register_class(SamplePoolFactory, "sample")
    registry.register_class(PropertyPoolFactory, "property")
    registry.register_class(NeedsArgumentsFactory, "needs-args")
    return registry


@pytest.fixture
def decorators() -> DecoratorRegistry:
    return DecoratorRegistry()


@pytest.fixture
def sample_factory() -> SamplePoolFactory:
    return SamplePoolFactory(
        url="sample://db/main",
        size=20,
        auto_commit=False,
        login_timeout=15,
        schemas=["public", "audit"],
        options={"ssl": True},
    )
