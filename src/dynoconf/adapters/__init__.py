"""dynoconf Adapters

Concrete pool factories that register themselves on import.
"""

from dynoconf.adapters.sqlalchemy_engine import (
    COMMON_PROPERTY_SYNONYMS,
    SQLAlchemyPoolFactory,
    create_sqlalchemy_pool_factory,
)

__all__ = [
    "COMMON_PROPERTY_SYNONYMS",
    "SQLAlchemyPoolFactory",
    "create_sqlalchemy_pool_factory",
]
