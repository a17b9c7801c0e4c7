"""Pydantic model of the state a QueryBuilder accumulates.

``QueryState`` is what the renderer consumes: a statement kind, a target
table and one list per clause.  Lists keep insertion order; the capacity
of each list is enforced by :class:`~sqlbrick.builder.QueryBuilder`, not
here, so a state can also be assembled directly for rendering.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sqlbrick.schema.columns import ColumnRef
from sqlbrick.schema.conditions import Condition
from sqlbrick.schema.expressions import StatementKind
from sqlbrick.schema.joins import Join
from sqlbrick.schema.tables import Table
from sqlbrick.schema.values import Value


class Assignment(BaseModel):
    """One ``column = value`` pair of an INSERT or UPDATE."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    value: Value


class OrderByItem(BaseModel):
    """A single ORDER BY entry.

    Attributes:
        column: Column or expression to order by.
        ascending: ``ASC`` when true, ``DESC`` otherwise.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    ascending: bool = True


class CommonTableExpression(BaseModel):
    """A ``name AS (<sql>)`` entry of a WITH prefix."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    sql: str


class QueryState(BaseModel):
    """Accumulated clause state of one statement.

    Attributes:
        kind: Statement kind; ``None`` until a statement method is called,
            rendered as SELECT.
        table: Target table (``FROM`` / ``INTO`` / ``UPDATE`` ...).
        columns: Select list; empty renders ``*``.
        values: INSERT values or UPDATE assignments.
        conditions: WHERE conditions, ANDed together.
        joins: JOIN clauses.
        order_by: ORDER BY entries.
        group_by: GROUP BY columns.
        having: HAVING fragment; empty when unset.
        limit: LIMIT; negative means unset.
        offset: OFFSET; negative means unset.
        distinct: Emit ``SELECT DISTINCT``.
        ctes: WITH-prefix entries.
    """

    model_config = ConfigDict(extra="forbid")

    kind: StatementKind | None = None
    table: Table | None = None
    columns: list[ColumnRef] = Field(default_factory=list)
    values: list[Assignment] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    joins: list[Join] = Field(default_factory=list)
    order_by: list[OrderByItem] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    having: str = ""
    limit: int = -1
    offset: int = -1
    distinct: bool = False
    ctes: list[CommonTableExpression] = Field(default_factory=list)

    @property
    def effective_kind(self) -> StatementKind:
        return self.kind or StatementKind.SELECT

    @property
    def table_name(self) -> str:
        return self.table.name if self.table is not None else ""
