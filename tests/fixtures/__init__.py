"""Test fixtures: sample table definitions and SQLite DDL."""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from sqlbrick import define_table
from sqlbrick.schema.tables import TableDefinition

_FIXTURES_DIR = Path(__file__).parent


class UserStatus(IntEnum):
    INACTIVE = 0
    ACTIVE = 1
    PENDING = 2


class Priority(Enum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3


def users_table() -> TableDefinition:
    return define_table(
        "users",
        id=int,
        name=str,
        email=str,
        active=bool,
        status=UserStatus,
        created_at=datetime,
    )


def orders_table() -> TableDefinition:
    return define_table("orders", id=int, user_id=int, total=float)


def tasks_table() -> TableDefinition:
    return define_table(
        "tasks",
        id=int,
        title=str,
        status=Priority,
        assigned_to=str,
        created_at=str,
        priority=int,
    )


def load_ddl() -> str:
    """Return the SQLite DDL for the sample tables."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
