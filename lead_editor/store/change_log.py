"""
Change history operations.

Every field written by a submission gets one change_log row recording the
old and new value and who made the change.
"""

from typing import Any

import psycopg
from psycopg.rows import dict_row

from lead_editor.core.models import ChangeLogEntry
from lead_editor.observability.logger import get_logger

from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

INSERT_CHANGE_LOG_SQL = """
    INSERT INTO change_log (
        entity_type,
        record_id,
        field_name,
        old_value,
        new_value,
        changed_by,
        changed_at
    ) VALUES (
        %(entity_type)s,
        %(record_id)s,
        %(field_name)s,
        %(old_value)s,
        %(new_value)s,
        %(changed_by)s,
        %(changed_at)s
    );
"""


def insert_change_logs(cur: psycopg.Cursor, entries: list[ChangeLogEntry]) -> int:
    """
    Insert change log entries using the caller's cursor.

    Runs inside the caller's transaction so the history rows commit or roll
    back together with the update they describe.

    Args:
        cur: Open cursor of the updating transaction
        entries: ChangeLogEntry instances to insert

    Returns:
        count: Number of entries inserted
    """
    if not entries:
        return 0

    params = [
        {
            "entity_type": entry.entity_type,
            "record_id": entry.record_id,
            "field_name": entry.field_name,
            "old_value": entry.old_value,
            "new_value": entry.new_value,
            "changed_by": entry.changed_by,
            "changed_at": entry.changed_at,
        }
        for entry in entries
    ]
    cur.executemany(INSERT_CHANGE_LOG_SQL, params)

    logger.debug(
        f"Inserted {len(entries)} change log entries",
        extra={"entity_type": entries[0].entity_type, "record_id": entries[0].record_id}
    )
    return len(entries)


def query_change_logs(
    pool: DatabaseConnectionPool,
    entity_type: str,
    record_id: str,
    limit: int = 100
) -> list[ChangeLogEntry]:
    """
    Query the change history of a record, newest first.

    Args:
        pool: Database connection pool
        entity_type: room, room_type or property
        record_id: Record ID to query
        limit: Maximum number of entries to return

    Returns:
        List of ChangeLogEntry

    Raises:
        psycopg.DatabaseError: If query fails
    """
    query_sql = """
        SELECT
            log_id,
            entity_type,
            record_id,
            field_name,
            old_value,
            new_value,
            changed_by,
            changed_at
        FROM change_log
        WHERE entity_type = %(entity_type)s
          AND record_id = %(record_id)s
        ORDER BY changed_at DESC, log_id DESC
        LIMIT %(limit)s;
    """

    try:
        with pool.get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    query_sql,
                    {"entity_type": entity_type, "record_id": record_id, "limit": limit}
                )
                rows: list[dict[str, Any]] = cur.fetchall()

    except psycopg.DatabaseError as e:
        logger.error(f"Failed to query change log: {e}")
        raise

    logger.debug(f"Found {len(rows)} change log entries for {entity_type} {record_id}")
    return [ChangeLogEntry(**row) for row in rows]
