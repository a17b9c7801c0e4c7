"""Unit tests for typed columns, select-list references and table definitions."""

from __future__ import annotations

from datetime import datetime

import pytest

from sqlbrick import (
    DEFAULT_CONFIG,
    BuilderConfig,
    ColumnRef,
    TypedColumn,
    all_of,
    as_,
    avg,
    col,
    column,
    column_alias,
    count,
    define_table,
    group_concat,
    max,
    min,
    placeholder,
    sum,
    table,
    value,
)
from sqlbrick.schema.columns import column_name, to_column_ref
from sqlbrick.schema.expressions import ComparisonOp
from sqlbrick.schema.tables import Table, TableDefinition, aliased_table, to_table
from tests.fixtures import Priority, UserStatus


# ---------------------------------------------------------------------------
# Typed comparisons
# ---------------------------------------------------------------------------


class TestTypedColumn:
    def test_operators_build_conditions(self, users):
        assert (users.id >= 18).render() == "id >= 18"
        assert (users.id < 5).render() == "id < 5"
        assert (users.name != "bob").render() == "name != 'bob'"

    def test_column_condition_uses_bare_name(self, users):
        assert users.active.eq(True).render() == "active = 1"

    def test_mismatched_value_type_raises(self, users):
        with pytest.raises(TypeError, match="users.id"):
            users.id.eq("eighteen")

    def test_bool_is_rejected_for_integer_column(self, users):
        with pytest.raises(TypeError):
            users.id.eq(True)

    def test_float_column_accepts_int(self, orders):
        assert orders.total.gt(10).render() == "total > 10"
        assert orders.total.gt(9.5).render() == "total > 9.5"

    def test_placeholder_and_null_always_accepted(self, users):
        assert users.id.eq(placeholder()).render() == "id = ?"
        assert users.name.eq(None).render() == "name = NULL"
        assert users.name.eq(value(3)).render() == "name = 3"

    def test_enum_column_takes_members(self, users, tasks):
        assert users.status.eq(UserStatus.ACTIVE).render() == "status = 1"
        assert tasks.status.ne(Priority.LOW).render() == "status != 0"
        with pytest.raises(TypeError):
            tasks.status.eq(3)

    def test_datetime_column(self, users):
        cond = users.created_at.ge(datetime(2024, 5, 1))
        assert cond.render() == "created_at >= '2024-05-01T00:00:00'"

    def test_untyped_column_accepts_anything(self):
        c = col("x")
        assert c.eq("a").render() == "x = 'a'"
        assert c.eq(1.5).render() == "x = 1.5"

    def test_between_checks_both_bounds(self, users):
        assert users.id.between(1, 10).render() == "id BETWEEN 1 AND 10"
        with pytest.raises(TypeError):
            users.id.between(1, "10")

    def test_in_checks_every_value(self, users):
        with pytest.raises(TypeError):
            users.id.in_([1, "2"])

    def test_in_list_is_truncated_to_max_in_values(self):
        config = BuilderConfig(max_in_values=3)
        c = column("t", "y", int, config=config)
        cond = c.in_(range(10))
        assert cond.render() == "y IN (0, 1, 2)"
        assert cond.capacity == 3

    def test_like_is_not_type_checked(self, users):
        assert users.id.like("1%").render() == "id LIKE '1%'"

    def test_incompatible_column_comparison_raises(self, users, orders):
        with pytest.raises(TypeError, match="Cannot compare"):
            users.name.eq(orders.total)

    def test_like_between_columns_is_rejected(self, users):
        with pytest.raises(ValueError, match="cannot compare two columns"):
            users.name.compare(ComparisonOp.LIKE, users.email)

    def test_numeric_columns_are_comparable(self, users, orders):
        assert (users.id < orders.total).render() == "users.id < orders.total"

    def test_columns_remain_hashable(self, users):
        assert len({users.id, users.id, users.name}) == 2


# ---------------------------------------------------------------------------
# Naming and aliasing
# ---------------------------------------------------------------------------


def test_qualified_name_and_str():
    c = column("users", "email", str)
    assert c.qualified_name == "users.email"
    assert str(c) == "users.email"
    assert col("email").qualified_name == "email"


def test_alias_does_not_change_original(users):
    aliased = column_alias(users.name, "username")
    assert aliased.alias == "username"
    assert users.name.alias is None
    assert aliased.ref().render() == "name AS username"


def test_repeated_alias_is_idempotent(users):
    once = users.name.as_("n")
    assert once.as_("n").ref().render() == once.ref().render() == "name AS n"
    assert as_(as_("x", "y"), "y") == as_("x", "y")


def test_as_on_any_expression():
    assert as_("name", "n").render() == "name AS n"
    assert as_(count(), "total").render() == "COUNT(*) AS total"


def test_aggregates():
    assert count().render() == "COUNT(*)"
    assert count("id").render() == "COUNT(id)"
    assert sum("total").render() == "SUM(total)"
    assert avg("total").render() == "AVG(total)"
    assert min("total").render() == "MIN(total)"
    assert max("total").render() == "MAX(total)"
    assert group_concat("name").render() == "GROUP_CONCAT(name)"


def test_aggregate_of_typed_column(orders):
    assert sum(orders.total).as_("revenue").render() == "SUM(total) AS revenue"


def test_all_of_is_star(users):
    assert all_of().render() == "*"
    assert users.all().render() == "*"


def test_column_name_and_ref_normalisation(users):
    assert column_name("x") == "x"
    assert column_name(users.email) == "email"
    assert column_name(ColumnRef(column="y")) == "y"
    assert to_column_ref("x") == ColumnRef(column="x")
    assert to_column_ref(users.id.as_("uid")) == ColumnRef(column="id", alias="uid")


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestTables:
    def test_table_render(self):
        assert table("users").render() == "users"
        assert aliased_table("users", "u").render() == "users u"
        assert aliased_table("users", "u").qualifier == "u"

    def test_define_table_exposes_typed_columns(self, users):
        assert isinstance(users, TableDefinition)
        assert isinstance(users.id, TypedColumn)
        assert users.id.table == "users"
        assert users.id.data_type is int
        assert users["email"].name == "email"
        assert "email" in users
        assert [c.name for c in users][:2] == ["id", "name"]

    def test_unknown_column_raises_attribute_error(self, users):
        with pytest.raises(AttributeError, match="no column 'missing'"):
            users.missing  # noqa: B018

    def test_aliased_definition_requalifies_columns(self, users, orders):
        u = users.aliased("u")
        assert u.table == Table(name="users", alias="u")
        assert (u.id == orders.user_id).render() == "u.id = orders.user_id"
        assert users.id.table == "users"

    def test_column_on_aliased_table(self):
        c = column(aliased_table("orders", "o"), "total", float)
        assert c.qualified_name == "o.total"

    def test_to_table_normalisation(self, users):
        assert to_table("t") == Table(name="t")
        assert to_table(users) == Table(name="users")
        with pytest.raises(TypeError):
            to_table(42)

    def test_config_propagates_to_columns(self):
        config = BuilderConfig(max_in_values=2)
        t = define_table("t", None, config, x=int)
        assert t.x.config is config
        assert t.x.in_([1, 2, 3]).render() == "x IN (1, 2)"

    def test_columns_may_share_parameter_names(self):
        t = define_table("accounts", id=int, name=str, config=str, columns=int)
        assert t.table == Table(name="accounts")
        assert t.name.data_type is str
        assert t.config.data_type is str
        assert t["columns"].data_type is int
        assert t.name.eq("x").render() == "name = 'x'"
        assert t.config.config is DEFAULT_CONFIG

    def test_mapping_columns_come_first(self):
        config = BuilderConfig(max_in_values=2)
        t = define_table("t", {"a": int, "name": str}, config, b=float)
        assert [c.name for c in t] == ["a", "name", "b"]
        assert all(c.config is config for c in t)
