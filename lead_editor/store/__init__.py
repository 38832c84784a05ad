"""
Record stores and the response cache.
"""

from lead_editor import config
from lead_editor.observability.logger import get_logger

from .base import RecordStore
from .cache import TTLCache, cache_key, record_endpoint
from .connection import DatabaseConnectionPool
from .memory import InMemoryRecordStore
from .postgres import PostgresRecordStore

logger = get_logger(__name__)


def create_store(schemas=None) -> RecordStore:
    """
    Build the configured record store.

    PostgreSQL when a database password is configured, otherwise an
    in-memory store seeded with sample data.
    """
    if config.database_configured():
        pool = DatabaseConnectionPool()
        pool.open()
        return PostgresRecordStore(pool, schemas)

    logger.info("No database configured; using in-memory sample data")
    return InMemoryRecordStore(seed=True)


__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "DatabaseConnectionPool",
    "TTLCache",
    "cache_key",
    "record_endpoint",
    "create_store",
]
