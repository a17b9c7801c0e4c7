"""Utilities for building table definitions from external sources.

SQLAlchemy converter
--------------------
:func:`tables_from_sqlalchemy` reflects a live database engine and returns
one :class:`~sqlbrick.schema.tables.TableDefinition` per table, with each
column typed by the Python type SQLAlchemy reports for it.

Install the optional dependency before using this module::

    pip install "sqlbrick[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from sqlbrick import select
    from sqlbrick.schema.converters import tables_from_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    tables = tables_from_sqlalchemy(engine)
    users = tables["users"]
    sql = select(users.id).from_(users).where(users.active.eq(True)).build()
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlbrick.schema.config import BuilderConfig
from sqlbrick.schema.tables import Table, TableDefinition

if TYPE_CHECKING:
    from sqlalchemy import Column, Engine, MetaData

logger = logging.getLogger("sqlbrick")

# Reflected Python types that have no literal form of their own.
_TYPE_ALIASES: dict[type, type] = {Decimal: float}


def tables_from_sqlalchemy(
    engine: Engine,
    *,
    include_tables: list[str] | None = None,
    schema: str | None = None,
    config: BuilderConfig | None = None,
) -> dict[str, TableDefinition]:
    """Build table definitions by reflecting a SQLAlchemy engine.

    All tables visible to the engine (or a subset via *include_tables*) are
    reflected using SQLAlchemy's :class:`~sqlalchemy.schema.MetaData`.
    Only the allowlisted tables are returned, even when reflection pulls in
    their foreign-key targets.  Columns whose SQL type has no Python
    equivalent are left untyped and accept any value.

    Args:
        engine: A connected :class:`sqlalchemy.engine.Engine` instance.
        include_tables: Optional allowlist of table names to reflect.
            When ``None`` all tables in the schema are reflected.
        schema: Optional database schema name (e.g. ``"public"`` for
            PostgreSQL).  Passed directly to
            :meth:`sqlalchemy.schema.MetaData.reflect`.
        config: Capacity regime attached to every column.

    Returns:
        Table name mapped to its :class:`TableDefinition`, in dependency
        order.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for tables_from_sqlalchemy(). "
            'Install it with: pip install "sqlbrick[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    with engine.connect() as conn:
        metadata.reflect(bind=conn, only=include_tables, schema=schema)
    tables = metadata_to_tables(metadata, config)
    if include_tables is None:
        return tables
    # reflect() also loads tables reached through foreign keys.
    return {name: t for name, t in tables.items() if name in include_tables}


def metadata_to_tables(
    metadata: MetaData, config: BuilderConfig | None = None
) -> dict[str, TableDefinition]:
    """Convert an already reflected (or declared) ``MetaData``."""
    return {
        table.name: TableDefinition(
            Table(name=table.name),
            {col.name: _python_type(col) for col in table.columns},
            config,
        )
        for table in metadata.sorted_tables
    }


def _python_type(col: Column) -> type | None:
    try:
        py_type = col.type.python_type
    except NotImplementedError:
        py_type = object
    # NullType and other opaque types report ``object``.
    if py_type is object:
        logger.debug("Column '%s' has no Python type; leaving it untyped.", col.name)
        return None
    return _TYPE_ALIASES.get(py_type, py_type)
