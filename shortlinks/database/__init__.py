"""Storage layer for short links."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .memory import MemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "Link",
    "create_store",
]


def create_store(
    database_url: str,
    create_tables: bool = True,
    pool_max_size: int = 10,
    timeout_seconds: int = 30,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Build the store named by ``database_url``.

    ``memory://`` selects the in-process store; anything else is handed to
    asyncpg as a PostgreSQL DSN.
    """
    if database_url.startswith("memory://"):
        return MemoryLinkStore(database_url, logger=logger)

    return PostgresLinkStore(
        db_config=database_url,
        create_tables=create_tables,
        pool_max_size=pool_max_size,
        connection_timeout_seconds=timeout_seconds,
        logger=logger,
    )
