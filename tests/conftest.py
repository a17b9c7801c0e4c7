"""Shared pytest fixtures for sqlbrick unit and integration tests."""
from __future__ import annotations

import pytest

from sqlbrick import BuilderConfig, QueryBuilder
from sqlbrick.schema.tables import TableDefinition
from tests.fixtures import orders_table, tasks_table, users_table


@pytest.fixture(scope="session")
def users() -> TableDefinition:
    return users_table()


@pytest.fixture(scope="session")
def orders() -> TableDefinition:
    return orders_table()


@pytest.fixture(scope="session")
def tasks() -> TableDefinition:
    return tasks_table()


@pytest.fixture()
def builder() -> QueryBuilder:
    """A fresh builder with the default (silent) configuration."""
    return QueryBuilder()


@pytest.fixture()
def small_config() -> BuilderConfig:
    """Tiny capacities so overflow paths are easy to reach."""
    return BuilderConfig(
        max_columns=2,
        max_conditions=2,
        max_joins=1,
        max_order_by=1,
        max_group_by=1,
        max_in_values=3,
        max_ctes=1,
    )


@pytest.fixture()
def strict_builder(small_config: BuilderConfig) -> QueryBuilder:
    """A small-capacity builder that raises on error."""
    return QueryBuilder(small_config.model_copy(update={"raise_on_error": True}))
