"""
PostgreSQL record store.

Partial updates are written with UPDATE ... SET over only the changed
columns; the previous values are read under a row lock in the same
transaction so the change log records exactly what was replaced.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import psycopg
from psycopg import sql

from lead_editor.core.models import ChangeLogEntry, FieldKind
from lead_editor.core.normalizer import normalize, unbox
from lead_editor.core.schema import SchemaRegistry
from lead_editor.errors import RecordNotFoundError, StoreError
from lead_editor.observability import metrics
from lead_editor.observability.logger import get_logger
from lead_editor.utils.validation import (
    InputValidationError,
    sanitize_sql_identifier,
    validate_actor,
    validate_limit,
    validate_record_id,
)

from .base import RecordStore
from .change_log import insert_change_logs, query_change_logs
from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

TABLES = {
    "property": "lead_property",
    "room": "lead_room",
    "room_type": "lead_room_type",
}


def to_wire(row: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a database row to the record shape editors work with.

    DATE and TIMESTAMP columns are boxed as {"value": iso string}; NUMERIC
    columns become floats.
    """
    record: dict[str, Any] = {}
    for key, value in row.items():
        if isinstance(value, datetime):
            value = {"value": value.isoformat()}
        elif isinstance(value, date):
            value = {"value": value.isoformat()}
        elif isinstance(value, Decimal):
            value = float(value)
        record[key] = value
    return record


class PostgresRecordStore(RecordStore):
    """RecordStore over the lead_property, lead_room and lead_room_type tables."""

    def __init__(self, pool: DatabaseConnectionPool, schemas: SchemaRegistry | None = None):
        self.pool = pool
        self.schemas = schemas or SchemaRegistry()

    def _table(self, entity_type: str) -> sql.Identifier:
        self.check_entity_type(entity_type)
        return sql.Identifier(TABLES[entity_type])

    @staticmethod
    def _column(field_name: str) -> sql.Identifier:
        try:
            return sql.Identifier(sanitize_sql_identifier(field_name, "field_name"))
        except InputValidationError as e:
            raise StoreError(str(e)) from e

    def _db_value(self, entity_type: str, field_name: str, value: Any) -> Any:
        """Value to bind for a column: numeric and date columns get their normalized form."""
        kind = self.schemas.get(entity_type).kind_of(field_name)
        if kind in (FieldKind.NUMERIC, FieldKind.DATE):
            return normalize(value, kind)
        value = unbox(value)
        return None if value == "" else value

    def _fail(self, entity_type: str, operation: str, error: Exception) -> StoreError:
        metrics.increment_counter(
            metrics.store_errors_total, 1, entity_type=entity_type, operation=operation
        )
        logger.error(
            f"Store {operation} failed: {error}",
            extra={"entity_type": entity_type, "operation": operation}
        )
        return StoreError(f"{operation} {entity_type} failed: {error}")

    def get(self, entity_type: str, record_id: str) -> dict[str, Any] | None:
        record_id = validate_record_id(record_id)
        query = sql.SQL("SELECT * FROM {table} WHERE id = %s").format(table=self._table(entity_type))

        try:
            rows = self.pool.execute_query(query, (record_id,))
        except psycopg.DatabaseError as e:
            raise self._fail(entity_type, "get", e) from e

        return to_wire(rows[0]) if rows else None

    def put(
        self,
        entity_type: str,
        record_id: str,
        changes: Mapping[str, Any],
        actor: str,
    ) -> dict[str, Any]:
        record_id = validate_record_id(record_id)
        actor = validate_actor(actor)
        table = self._table(entity_type)
        if not changes:
            raise StoreError("Refusing to write an empty change set")

        columns = [self._column(name) for name in changes]
        values = [self._db_value(entity_type, name, value) for name, value in changes.items()]

        select_query = sql.SQL("SELECT {columns} FROM {table} WHERE id = %s FOR UPDATE").format(
            columns=sql.SQL(", ").join(columns),
            table=table,
        )
        update_query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s RETURNING {columns}").format(
            table=table,
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(column) for column in columns
            ),
            columns=sql.SQL(", ").join(columns),
        )

        try:
            with self.pool.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(select_query, (record_id,))
                    before = cur.fetchone()
                    if before is None:
                        conn.rollback()
                        raise RecordNotFoundError(entity_type, record_id)

                    cur.execute(update_query, (*values, record_id))
                    after = cur.fetchone()

                    insert_change_logs(cur, [
                        ChangeLogEntry(
                            entity_type=entity_type,
                            record_id=record_id,
                            field_name=name,
                            old_value=to_wire(before).get(name),
                            new_value=to_wire(after).get(name),
                            changed_by=actor,
                        )
                        for name in changes
                    ])
                conn.commit()
        except psycopg.DatabaseError as e:
            raise self._fail(entity_type, "put", e) from e

        applied = to_wire(after)
        logger.info(
            f"Updated {entity_type} {record_id}",
            extra={"entity_type": entity_type, "record_id": record_id, "fields": list(applied)}
        )
        return applied

    def list(self, entity_type: str, **filters: Any) -> list[dict[str, Any]]:
        table = self._table(entity_type)
        conditions = [
            sql.SQL("{} = %s").format(self._column(name)) for name in filters
        ]
        query = sql.SQL("SELECT * FROM {table}").format(table=table)
        if conditions:
            query = query + sql.SQL(" WHERE ") + sql.SQL(" AND ").join(conditions)
        query = query + sql.SQL(" ORDER BY id")

        params = tuple(self._db_value(entity_type, name, value) for name, value in filters.items())
        try:
            rows = self.pool.execute_query(query, params)
        except psycopg.DatabaseError as e:
            raise self._fail(entity_type, "list", e) from e
        return [to_wire(row) for row in rows]

    def find_duplicates(
        self,
        entity_type: str,
        field_name: str,
        value: Any,
        exclude_id: str | None = None,
    ) -> list[dict[str, Any]]:
        bound = self._db_value(entity_type, field_name, value)
        if bound is None:
            return []

        query = sql.SQL("SELECT * FROM {table} WHERE {column} = %s AND id IS DISTINCT FROM %s ORDER BY id").format(
            table=self._table(entity_type),
            column=self._column(field_name),
        )
        try:
            rows = self.pool.execute_query(query, (bound, exclude_id))
        except psycopg.DatabaseError as e:
            raise self._fail(entity_type, "find_duplicates", e) from e
        return [to_wire(row) for row in rows]

    def history(self, entity_type: str, record_id: str, limit: int = 100) -> list[ChangeLogEntry]:
        self.check_entity_type(entity_type)
        record_id = validate_record_id(record_id)
        limit = validate_limit(limit)
        try:
            return query_change_logs(self.pool, entity_type, record_id, limit)
        except psycopg.DatabaseError as e:
            raise self._fail(entity_type, "history", e) from e

    def close(self) -> None:
        self.pool.close()
