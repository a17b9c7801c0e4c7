"""Unit tests for sqlbrick.schema.converters.tables_from_sqlalchemy."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.types import NullType

import sqlbrick
from sqlbrick import BuilderConfig
from sqlbrick.schema.converters import metadata_to_tables, tables_from_sqlalchemy
from tests.fixtures import load_ddl


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_engine() -> Engine:
    """Return an in-memory SQLite engine with the sample tables."""
    engine = create_engine("sqlite:///:memory:")
    with engine.begin() as conn:
        for statement in load_ddl().split(";"):
            if statement.strip():
                conn.execute(text(statement))
    return engine


# ---------------------------------------------------------------------------
# Reflection
# ---------------------------------------------------------------------------


class TestReflection:
    def test_all_tables_reflected(self):
        tables = tables_from_sqlalchemy(_make_engine())
        assert set(tables) == {"users", "orders", "tasks"}

    def test_include_tables_allowlist(self):
        tables = tables_from_sqlalchemy(_make_engine(), include_tables=["orders"])
        assert list(tables) == ["orders"]

    def test_column_types_follow_sql_types(self):
        orders = tables_from_sqlalchemy(_make_engine())["orders"]
        assert orders.id.data_type is int
        assert orders.total.data_type is float
        assert [c.name for c in orders] == ["id", "user_id", "total"]

    def test_reflected_columns_are_type_checked(self):
        users = tables_from_sqlalchemy(_make_engine())["users"]
        assert users.name.eq("ann").render() == "name = 'ann'"
        with pytest.raises(TypeError):
            users.id.eq("one")

    def test_config_is_attached(self):
        config = BuilderConfig(max_in_values=2)
        tasks = tables_from_sqlalchemy(_make_engine(), config=config)["tasks"]
        assert tasks.priority.in_([1, 2, 3]).render() == "priority IN (1, 2)"

    def test_reflected_tables_build_runnable_sql(self):
        engine = _make_engine()
        tables = tables_from_sqlalchemy(engine)
        users, orders = tables["users"], tables["orders"]
        sql = (
            sqlbrick.select(users.name)
            .from_(users)
            .inner_join(orders, users.id == orders.user_id)
            .where(orders.total > 10)
            .build()
        )
        with engine.connect() as conn:
            assert conn.execute(text(sql)).fetchall() == []


# ---------------------------------------------------------------------------
# Declared metadata
# ---------------------------------------------------------------------------


def test_metadata_to_tables_maps_declared_types():
    metadata = MetaData()
    Table(
        "events",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(50)),
        Column("public", Boolean),
        Column("day", Date),
        Column("price", Numeric(10, 2)),
        Column("blob", NullType()),
    )
    events = metadata_to_tables(metadata)["events"]
    assert events.title.data_type is str
    assert events.public.data_type is bool
    assert events.day.data_type is date
    assert events.price.data_type is float
    assert events.blob.data_type is None
    assert events.price.eq(9.99).render() == "price = 9.99"
