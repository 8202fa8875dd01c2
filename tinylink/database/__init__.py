"""Storage layer for TinyLink."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import LinkStoreBase
from .memory import InMemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore
from .redis_store import RedisLinkStore

__all__ = [
    "LinkStoreBase",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "RedisLinkStore",
    "Link",
    "create_store",
]


def create_store(
    database_url: str,
    logger: Optional[logging.Logger] = None,
    create_tables: bool = False,
    pool_max_size: int = 10,
) -> LinkStoreBase:
    """Build the store matching the scheme of ``database_url``.

    Args:
        database_url: postgresql://, redis:// or memory:// URL
        logger: Optional logger instance
        create_tables: Create the Postgres schema on connect
        pool_max_size: Postgres pool size

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = urlparse(database_url).scheme.lower()

    if scheme in ("postgresql", "postgres"):
        return PostgresLinkStore(
            db_config=database_url,
            pool_max_size=pool_max_size,
            create_tables=create_tables,
            logger=logger,
        )
    if scheme in ("redis", "rediss"):
        return RedisLinkStore(db_config=database_url, logger=logger)
    if scheme == "memory":
        return InMemoryLinkStore(db_config=database_url, logger=logger)

    raise ValueError(f"Unsupported database URL scheme: {scheme!r}")
