"""sqlbrick – a typed, fluent SQL query builder.

Build queries from typed fragments; get SQL text back.

Public API
----------
``select`` / ``insert`` / ``insert_or_replace`` / ``update`` /
``delete_from`` / ``truncate``
    Start a fresh :class:`QueryBuilder` in the given statement kind.

``QueryBuilder``
    The fluent accumulator; ``build()`` renders SQL, ``build_result()``
    returns an ok / error :class:`BuildResult` without raising.

Fragments
---------
``value``, ``placeholder``, ``col``, ``column``, ``column_alias``, ``as_``,
``all_of``, ``count`` / ``sum`` / ``avg`` / ``min`` / ``max`` /
``group_concat``, ``raw``, ``and_`` / ``or_`` / ``not_``, ``table``,
``aliased_table`` and ``define_table``.

Example::

    import sqlbrick

    users = sqlbrick.define_table("users", id=int, name=str, active=bool)
    orders = sqlbrick.define_table("orders", id=int, user_id=int)

    sql = (
        sqlbrick.select(users.id, users.name)
        .from_(users)
        .inner_join(orders, users.id == orders.user_id)
        .where(users.active.eq(True))
        .build()
    )
    # SELECT id, name FROM users INNER JOIN orders ON users.id = orders.user_id
    # WHERE active = 1

The library renders text only: it does not execute statements or bind
parameters.  Textual values are single-quoted with embedded quotes doubled;
raw fragments are trusted and emitted verbatim.
"""

from __future__ import annotations

from typing import Any

from sqlbrick.builder import QueryBuilder
from sqlbrick.compile.base import BuildResult
from sqlbrick.compile.renderer import SQLRenderer
from sqlbrick.errors import (
    NO_ERROR,
    CapacityError,
    ConfigError,
    EmptyTableError,
    ErrorCode,
    InvalidColumnError,
    InvalidConditionError,
    QueryBuildError,
    QueryError,
    SQLBrickError,
)
from sqlbrick.schema.columns import (
    ColumnRef,
    TypedColumn,
    all_of,
    as_,
    avg,
    col,
    column,
    column_alias,
    count,
    group_concat,
    max,
    min,
    sum,
)
from sqlbrick.schema.conditions import (
    CONDITION_ADAPTER,
    Condition,
    InvalidCondition,
    RawCondition,
    and_,
    not_,
    or_,
    raw,
)
from sqlbrick.schema.config import DEFAULT_CONFIG, BuilderConfig
from sqlbrick.schema.expressions import (
    Aggregate,
    ComparisonOp,
    JoinKind,
    LogicalOp,
    PlaceholderStyle,
    StatementKind,
)
from sqlbrick.schema.joins import Join
from sqlbrick.schema.placeholder import Placeholder, placeholder
from sqlbrick.schema.tables import Table, TableDefinition, aliased_table, define_table, table
from sqlbrick.schema.values import VALUE_ADAPTER, Value, value

__all__ = [
    # Statement entry points
    "select",
    "insert",
    "insert_or_replace",
    "update",
    "delete_from",
    "truncate",
    # Builder
    "QueryBuilder",
    "BuildResult",
    "SQLRenderer",
    # Configuration
    "BuilderConfig",
    "DEFAULT_CONFIG",
    # Values
    "Value",
    "VALUE_ADAPTER",
    "value",
    "Placeholder",
    "placeholder",
    # Columns and tables
    "ColumnRef",
    "TypedColumn",
    "col",
    "column",
    "column_alias",
    "as_",
    "all_of",
    "count",
    "sum",
    "avg",
    "min",
    "max",
    "group_concat",
    "Table",
    "TableDefinition",
    "table",
    "aliased_table",
    "define_table",
    "Join",
    # Conditions
    "Condition",
    "CONDITION_ADAPTER",
    "InvalidCondition",
    "RawCondition",
    "raw",
    "and_",
    "or_",
    "not_",
    # Enums
    "Aggregate",
    "ComparisonOp",
    "JoinKind",
    "LogicalOp",
    "PlaceholderStyle",
    "StatementKind",
    # Errors
    "ErrorCode",
    "QueryError",
    "NO_ERROR",
    "SQLBrickError",
    "ConfigError",
    "QueryBuildError",
    "CapacityError",
    "EmptyTableError",
    "InvalidColumnError",
    "InvalidConditionError",
]


def select(*columns: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start a SELECT: ``select("id", "name").from_("users")``.

    Args:
        *columns: Select-list entries (see :meth:`QueryBuilder.select`).
        config: Optional builder configuration.

    Returns:
        A new :class:`QueryBuilder`.
    """
    return QueryBuilder(config).select(*columns)


def insert(target: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start an ``INSERT INTO target``."""
    return QueryBuilder(config).insert(target)


def insert_or_replace(target: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start an ``INSERT OR REPLACE INTO target``."""
    return QueryBuilder(config).insert_or_replace(target)


def update(target: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start an ``UPDATE target``."""
    return QueryBuilder(config).update(target)


def delete_from(target: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start a ``DELETE FROM target``."""
    return QueryBuilder(config).delete_from(target)


def truncate(target: Any, config: BuilderConfig | None = None) -> QueryBuilder:
    """Start a ``TRUNCATE TABLE target``."""
    return QueryBuilder(config).truncate(target)
