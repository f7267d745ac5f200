"""SQLAlchemy async engine pool factory for dynoconf"""

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import attrs
from attrs import define, field
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from dynoconf.core.exceptions import InstantiationError
from dynoconf.core.factory import PooledConnectionFactory
from dynoconf.core.registry import register_factory

# Alternate property names used by JDBC-style pool configurations
COMMON_PROPERTY_SYNONYMS: Dict[str, str] = {
    "url": "jdbcUrl",
    "username": "user",
    "poolSize": "maximumPoolSize",
    "poolTimeout": "connectionTimeout",
}


def _non_negative(instance, attribute, value):
    if value < 0:
        raise ValueError(f"{attribute.name} cannot be negative")


def _positive(instance, attribute, value):
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive")


@register_factory("sqlalchemy")
@define
class SQLAlchemyPoolFactory(PooledConnectionFactory):
    """
    Pool factory producing a SQLAlchemy ``AsyncEngine`` with a queue pool

    Every public field is a descriptor property (``pool_size`` becomes
    ``poolSize``). Validators run on assignment as well as on construction,
    so a rejected value surfaces as a ``ConfigurationError`` when built from
    a descriptor.

    Example:
        factory = SQLAlchemyPoolFactory(
            url="postgresql://localhost:5432/mydb",
            username="postgres",
            pool_size=20,
        )

        await factory.initialize()

        async with factory.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """

    url: str = field(default="", validator=attrs.validators.instance_of(str))
    username: Optional[str] = field(default=None)
    password: Optional[str] = field(default=None, repr=False)
    pool_size: int = field(default=5, validator=_non_negative)
    max_overflow: int = field(default=10, validator=_non_negative)
    pool_timeout: int = field(default=30, validator=_positive)
    pool_recycle: int = field(default=3600, validator=_positive)
    pool_pre_ping: bool = field(default=True)
    echo: bool = field(default=False)
    login_timeout: int = field(default=0, validator=_non_negative)
    init_statements: List[str] = field(factory=list)
    connect_args: Dict[str, Any] = field(factory=dict)

    _engine: Optional[AsyncEngine] = field(default=None, init=False, repr=False)

    @property
    def service_type(self):
        return "sqlalchemy"

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    def database_url(self) -> str:
        """Build the database URL, applying username/password overrides"""
        if not self.url:
            raise InstantiationError("SQLAlchemy pool factory requires a url")

        url = make_url(self.url)
        # Ensure we're using an async driver for PostgreSQL
        if url.drivername == "postgresql":
            url = url.set(drivername="postgresql+asyncpg")
        if self.username is not None:
            url = url.set(username=self.username)
        if self.password is not None:
            url = url.set(password=self.password)
        return url.render_as_string(hide_password=False)

    def engine_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``create_async_engine``"""
        connect_args = dict(self.connect_args)
        if self.login_timeout:
            connect_args.setdefault("timeout", self.login_timeout)

        options: Dict[str, Any] = {
            "poolclass": AsyncAdaptedQueuePool,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": self.pool_pre_ping,
            "echo": self.echo,
        }
        if connect_args:
            options["connect_args"] = connect_args
        return options

    async def initialize(self):
        """Create the async engine (connections are opened lazily by the pool)"""
        if self._initialized:
            self._logger.debug("SQLAlchemy pool factory already initialized")
            return

        try:
            self._engine = create_async_engine(self.database_url(), **self.engine_options())
            if self.init_statements:
                event.listen(self._engine.sync_engine, "connect", self._on_connect)

            self._initialized = True
            self._logger.info(
                f"SQLAlchemy pool factory initialized with pool_size={self.pool_size}, "
                f"max_overflow={self.max_overflow}"
            )

        except Exception as e:
            self._logger.error(f"Failed to initialize SQLAlchemy pool factory: {e}")
            raise InstantiationError(f"SQLAlchemy engine creation failed: {e}") from e

    def _on_connect(self, dbapi_connection, connection_record):
        """Run init statements on every new DBAPI connection"""
        cursor = dbapi_connection.cursor()
        try:
            for statement in self.init_statements:
                cursor.execute(statement)
        finally:
            cursor.close()
        self._logger.debug(f"Ran {len(self.init_statements)} init statements on new connection")

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncConnection, None]:
        """
        Check a connection out of the pool

        Usage:
            async with factory.connect() as conn:
                await conn.execute(text("SELECT 1"))
        """
        if self._closed:
            raise RuntimeError("SQLAlchemy pool factory has been closed and cannot be used")
        if not self._initialized:
            await self.initialize()

        async with self._engine.connect() as conn:
            yield conn

    async def ping(self) -> bool:
        """Run a lightweight ``SELECT 1`` through the pool"""
        try:
            async with self.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            self._logger.error(f"SQLAlchemy pool factory ping failed: {e}")
            return False

    async def close(self):
        """Dispose the engine and its pool"""
        if self._closed:
            self._logger.debug("SQLAlchemy pool factory already closed")
            return

        try:
            if self._engine is not None:
                await self._engine.dispose()
                self._logger.info("SQLAlchemy engine disposed")

            self._engine = None
            self._closed = True

        except Exception as e:
            self._logger.error(f"Error closing SQLAlchemy pool factory: {e}")
            raise


# Convenience functions for creating SQLAlchemy pool factories


def create_sqlalchemy_pool_factory(
    url: Optional[str] = None, **properties: Any
) -> SQLAlchemyPoolFactory:
    """
    Create a SQLAlchemy pool factory with environment variable fallbacks

    Args:
        url: Database URL (falls back to environment variables)
        **properties: Additional factory fields (``pool_size=20`` etc.)

    Environment Variables:
        DATABASE_URL, or POSTGRES_HOST, POSTGRES_PORT, POSTGRES_USER,
        POSTGRES_PASSWORD, POSTGRES_DB
    """
    if url is None:
        if "DATABASE_URL" in os.environ:
            url = os.environ["DATABASE_URL"]
        else:
            host = os.environ.get("POSTGRES_HOST", "localhost")
            port = int(os.environ.get("POSTGRES_PORT", "5432"))
            database = os.environ.get("POSTGRES_DB", "")
            url = f"postgresql://{host}:{port}/{database}"
            properties.setdefault("username", os.environ.get("POSTGRES_USER") or None)
            properties.setdefault("password", os.environ.get("POSTGRES_PASSWORD") or None)

    return SQLAlchemyPoolFactory(url=url, **properties)
