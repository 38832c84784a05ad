"""
Pytest configuration and fixtures for lead-editor tests

This module provides shared fixtures for unit and integration tests.
"""
import os
from typing import Generator

import psycopg
import pytest
from testcontainers.postgres import PostgresContainer

from lead_editor.core.schema import SchemaRegistry
from lead_editor.store import InMemoryRecordStore, TTLCache
from lead_editor.store.connection import DatabaseConnectionPool
from lead_editor.store.memory import sample_records


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# SCHEMA & RECORD FIXTURES
# =======================

@pytest.fixture(scope="session")
def schemas() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def room_schema(schemas):
    return schemas.get("room")


@pytest.fixture
def room_baseline() -> dict:
    """A room of "Tower X" whose name follows the derived format"""
    return {
        "id": "R101",
        "status": "A",
        "name": "Tower X 101",
        "room_number": "101",
        "lead_property_id": "P001",
        "lead_room_type_id": "RT001",
        "create_date": {"value": "2025-06-30"},
        "key_handover_scheduled_date": {"value": "2025-04-01"},
        "vacate_setup": "",
    }


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    """In-memory store seeded with the sample property, rooms and room types"""
    return InMemoryRecordStore(seed=True)


class FakeClock:
    """Manually advanced clock for cache expiry tests"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(ttl_seconds=300, clock=clock)


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

INIT_SQL_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "docker", "init-db.sql")


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Start PostgreSQL container for integration tests

    Skips the requesting tests when Docker is not reachable.

    Yields:
        PostgresContainer instance with initialized database
    """
    postgres = PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_editor",
        password="test_password",
        dbname="test_lead_editor",
        driver=None,
    )
    try:
        postgres.start()
    except Exception as e:  # docker daemon missing or unreachable
        pytest.skip(f"Docker is not available: {e}")

    try:
        with open(INIT_SQL_PATH, encoding="utf-8") as f:
            init_sql = f.read()

        with psycopg.connect(postgres.get_connection_url()) as conn:
            with conn.cursor() as cur:
                cur.execute(init_sql)
            conn.commit()

        yield postgres
    finally:
        postgres.stop()


@pytest.fixture(scope="session")
def db_pool(postgres_container) -> Generator[DatabaseConnectionPool, None, None]:
    """Connection pool on the test container"""
    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_lead_editor",
        user="test_editor",
        password="test_password",
    )
    pool.open()
    yield pool
    pool.close()


@pytest.fixture(scope="function")
def clean_db(db_pool) -> Generator[DatabaseConnectionPool, None, None]:
    """
    Truncate all tables and load the sample property before each test

    Yields:
        DatabaseConnectionPool on a freshly seeded database
    """
    records = sample_records()
    with db_pool.get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE TABLE change_log, lead_room, lead_room_type, lead_property CASCADE")

            for table, entity_type in (
                ("lead_property", "property"),
                ("lead_room_type", "room_type"),
                ("lead_room", "room"),
            ):
                for row in records[entity_type]:
                    row = {k: v["value"] if isinstance(v, dict) else v for k, v in row.items()}
                    columns = ", ".join(row)
                    placeholders = ", ".join(f"%({k})s" for k in row)
                    cur.execute(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", row)
        conn.commit()

    yield db_pool
