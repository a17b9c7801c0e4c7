"""Fluent query builder.

``QueryBuilder`` accumulates clause fragments into a
:class:`~sqlbrick.schema.query_state.QueryState` under the capacity bounds
of its :class:`~sqlbrick.schema.config.BuilderConfig`, then hands the state
to :class:`~sqlbrick.compile.renderer.SQLRenderer`::

    from sqlbrick import QueryBuilder, col

    sql = (
        QueryBuilder()
        .select("id", "name")
        .from_("users")
        .where(col("active").eq(True))
        .order_by("name")
        .limit(10)
        .build()
    )
    # SELECT id, name FROM users WHERE active = 1 ORDER BY name ASC LIMIT 10

State machine
-------------
The statement kind starts unset (rendered as SELECT) and is switched by
``select`` / ``insert`` / ``insert_or_replace`` / ``update`` /
``delete_from`` / ``truncate``.  ``reset()`` returns to the initial state.

Error handling
--------------
Every slot-adding call checks capacity first.  On overflow the error is
recorded on :attr:`QueryBuilder.last_error`, the call leaves the state
untouched, and, when ``raise_on_error`` is set, the matching
:class:`~sqlbrick.errors.CapacityError` is raised.  A rejected addition
persists until ``reset()`` and makes every subsequent build fail with it.
Render errors (a missing table or missing values) are checked again on
each build, so completing the statement clears them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from sqlbrick.compile.base import BuildResult
from sqlbrick.compile.renderer import SQLRenderer
from sqlbrick.errors import (
    NO_ERROR,
    ErrorCode,
    QueryBuildError,
    QueryError,
    exception_for,
)
from sqlbrick.schema.columns import (
    ColumnLike,
    ColumnRef,
    TypedColumn,
    column_name,
    to_column_ref,
)
from sqlbrick.schema.conditions import (
    BetweenCondition,
    ComparisonCondition,
    Condition,
    MembershipCondition,
    NullCheckCondition,
    RawCondition,
    iter_membership,
)
from sqlbrick.schema.config import DEFAULT_CONFIG, BuilderConfig
from sqlbrick.schema.expressions import ComparisonOp, JoinKind, StatementKind
from sqlbrick.schema.joins import Join
from sqlbrick.schema.query_state import (
    Assignment,
    CommonTableExpression,
    OrderByItem,
    QueryState,
)
from sqlbrick.schema.tables import to_table
from sqlbrick.schema.values import value as to_value

logger = logging.getLogger("sqlbrick")

ERROR_SENTINEL = "/* ERROR: {message} */"

_RENDERER = SQLRenderer()


class QueryBuilder:
    """Accumulates one SQL statement and renders it on :meth:`build`.

    A builder is meant for a single caller; it is not thread-safe.  It is
    not consumed by ``build()`` and can be reused after ``reset()``.

    Args:
        config: Capacity bounds and error mode; defaults to
            :data:`~sqlbrick.schema.config.DEFAULT_CONFIG`.
    """

    def __init__(self, config: BuilderConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._state = QueryState()
        self._last_error: QueryError = NO_ERROR
        self._blocking_error: QueryError = NO_ERROR

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def state(self) -> QueryState:
        """A deep copy of the accumulated state."""
        return self._state.model_copy(deep=True)

    @property
    def kind(self) -> StatementKind | None:
        """The statement kind, or ``None`` before any statement method."""
        return self._state.kind

    @property
    def last_error(self) -> QueryError:
        """The most recent error; falsy when none is present.

        A render error is replaced by the next build's outcome, while a
        rejected addition stays until :meth:`reset`.
        """
        return self._last_error

    # ------------------------------------------------------------------
    # Error recording
    # ------------------------------------------------------------------

    def _record(self, error: QueryError) -> QueryBuilder:
        self._blocking_error = self._last_error = error
        if self._config.raise_on_error:
            raise exception_for(error)
        return self

    def _reject(self, code: ErrorCode, slot: str, capacity: int) -> QueryBuilder:
        logger.debug("Rejected addition to full %s slot (capacity=%d).", slot, capacity)
        message = f"Too many {slot.replace('_', ' ')} (max {capacity})."
        return self._record(QueryError(code=code, message=message, capacity=capacity))

    def _has_room(self, current: int, adding: int, capacity: int) -> bool:
        return current + adding <= capacity

    # ------------------------------------------------------------------
    # Statement kinds
    # ------------------------------------------------------------------

    def select(self, *columns: ColumnLike | Iterable[ColumnLike]) -> QueryBuilder:
        """Start (or extend) a SELECT with the given select-list entries.

        Args:
            *columns: Column names, typed columns or :class:`ColumnRef`
                values; iterables of these are flattened.  ``"*"`` and no
                columns at all both render ``*``.
        """
        refs = [to_column_ref(c) for c in _flatten(columns)]
        if not self._has_room(len(self._state.columns), len(refs), self._config.max_columns):
            return self._reject(ErrorCode.TOO_MANY_COLUMNS, "columns", self._config.max_columns)
        self._state.kind = StatementKind.SELECT
        self._state.columns.extend(refs)
        return self

    def from_(self, table: Any) -> QueryBuilder:
        """Set the target table (``str``, ``Table`` or ``TableDefinition``)."""
        self._state.table = to_table(table)
        return self

    def insert(self, table: Any) -> QueryBuilder:
        return self._start(StatementKind.INSERT, table)

    def insert_or_replace(self, table: Any) -> QueryBuilder:
        return self._start(StatementKind.INSERT_OR_REPLACE, table)

    def update(self, table: Any) -> QueryBuilder:
        return self._start(StatementKind.UPDATE, table)

    def delete_from(self, table: Any) -> QueryBuilder:
        return self._start(StatementKind.DELETE, table)

    def truncate(self, table: Any) -> QueryBuilder:
        return self._start(StatementKind.TRUNCATE, table)

    def _start(self, kind: StatementKind, table: Any) -> QueryBuilder:
        self._state.kind = kind
        self._state.table = to_table(table)
        return self

    # ------------------------------------------------------------------
    # INSERT / UPDATE values
    # ------------------------------------------------------------------

    def value(self, column: ColumnLike, val: Any) -> QueryBuilder:
        """Add an INSERT ``column``/``value`` pair."""
        return self._assign(column, val)

    def set(self, column: ColumnLike, val: Any) -> QueryBuilder:
        """Add an UPDATE ``column = value`` assignment."""
        return self._assign(column, val)

    def _assign(self, column: ColumnLike, val: Any) -> QueryBuilder:
        if isinstance(column, TypedColumn):
            converted = column.coerce(val)
        else:
            converted = to_value(val)
        if not self._has_room(len(self._state.values), 1, self._config.max_columns):
            return self._reject(ErrorCode.TOO_MANY_COLUMNS, "columns", self._config.max_columns)
        self._state.values.append(Assignment(column=column_name(column), value=converted))
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, kind: JoinKind, table: Any, on: str | Condition = "") -> QueryBuilder:
        """Add a JOIN of any kind; ``on`` is text or a condition."""
        if not self._has_room(len(self._state.joins), 1, self._config.max_joins):
            return self._reject(ErrorCode.TOO_MANY_JOINS, "joins", self._config.max_joins)
        on_sql = on if isinstance(on, str) else on.render()
        self._state.joins.append(Join(kind=kind, table=to_table(table).render(), on=on_sql))
        return self

    def inner_join(self, table: Any, on: str | Condition) -> QueryBuilder:
        return self.join(JoinKind.INNER, table, on)

    def left_join(self, table: Any, on: str | Condition) -> QueryBuilder:
        return self.join(JoinKind.LEFT, table, on)

    def right_join(self, table: Any, on: str | Condition) -> QueryBuilder:
        return self.join(JoinKind.RIGHT, table, on)

    def full_join(self, table: Any, on: str | Condition) -> QueryBuilder:
        return self.join(JoinKind.FULL, table, on)

    def cross_join(self, table: Any, on: str | Condition = "") -> QueryBuilder:
        return self.join(JoinKind.CROSS, table, on)

    # ------------------------------------------------------------------
    # WHERE family
    # ------------------------------------------------------------------

    def where(self, condition: Condition) -> QueryBuilder:
        """Add a WHERE condition; top-level conditions are ANDed."""
        if not self._has_room(len(self._state.conditions), 1, self._config.max_conditions):
            return self._reject(
                ErrorCode.TOO_MANY_CONDITIONS, "conditions", self._config.max_conditions
            )
        self._state.conditions.append(self._adopt(condition))
        return self

    def _adopt(self, condition: Condition) -> Condition:
        limit = self._config.max_in_values
        if any(node.capacity != limit for node in iter_membership(condition)):
            logger.debug(
                "Condition built under a different max_in_values; storing it as raw SQL."
            )
            return RawCondition(text=condition.render())
        return condition

    def where_op(self, column: ColumnLike, op: str | ComparisonOp, val: Any) -> QueryBuilder:
        """``WHERE column OP value`` with the operator given as text.

        Raises:
            ValueError: If ``op`` is not a recognised comparison operator.
        """
        parsed = ComparisonOp.parse(op)
        if isinstance(column, TypedColumn):
            return self.where(column.compare(parsed, val))
        return self.where(
            ComparisonCondition(column=column_name(column), op=parsed, value=to_value(val))
        )

    def where_in(self, column: ColumnLike, values: Iterable[Any]) -> QueryBuilder:
        return self.where(self._membership(column, values, "in"))

    def where_not_in(self, column: ColumnLike, values: Iterable[Any]) -> QueryBuilder:
        return self.where(self._membership(column, values, "not_in"))

    def _membership(self, column: ColumnLike, values: Iterable[Any], kind: str) -> MembershipCondition:
        if isinstance(column, TypedColumn):
            typed = replace(column, config=self._config)
        else:
            typed = TypedColumn(table="", name=column_name(column), config=self._config)
        return typed.membership(values, kind)

    def where_between(self, column: ColumnLike, low: Any, high: Any) -> QueryBuilder:
        if isinstance(column, TypedColumn):
            return self.where(column.between(low, high))
        return self.where(
            BetweenCondition(column=column_name(column), low=to_value(low), high=to_value(high))
        )

    def where_like(self, column: ColumnLike, pattern: Any) -> QueryBuilder:
        """``WHERE column LIKE pattern``; the pattern is never type-checked."""
        if isinstance(column, TypedColumn):
            return self.where(column.like(pattern))
        return self.where(
            ComparisonCondition(
                column=column_name(column), op=ComparisonOp.LIKE, value=to_value(pattern)
            )
        )

    def where_not_like(self, column: ColumnLike, pattern: Any) -> QueryBuilder:
        if isinstance(column, TypedColumn):
            return self.where(column.not_like(pattern))
        return self.where(
            ComparisonCondition(
                column=column_name(column), op=ComparisonOp.NOT_LIKE, value=to_value(pattern)
            )
        )

    def where_null(self, column: ColumnLike) -> QueryBuilder:
        return self.where(NullCheckCondition(kind="is_null", column=column_name(column)))

    def where_not_null(self, column: ColumnLike) -> QueryBuilder:
        return self.where(NullCheckCondition(kind="is_not_null", column=column_name(column)))

    def where_exists(self, subquery: str | QueryBuilder) -> QueryBuilder:
        """``WHERE EXISTS (<subquery>)``; a builder is rendered immediately."""
        sql = self._subquery_sql(subquery)
        if sql is None:
            return self
        return self.where(RawCondition(text=f"EXISTS ({sql})"))

    def where_raw(self, text: str) -> QueryBuilder:
        """Add a trusted SQL fragment verbatim."""
        return self.where(RawCondition(text=text))

    # ------------------------------------------------------------------
    # Grouping, ordering, paging
    # ------------------------------------------------------------------

    def distinct(self) -> QueryBuilder:
        self._state.distinct = True
        return self

    def group_by(self, *columns: ColumnLike) -> QueryBuilder:
        names = [column_name(c) for c in columns]
        if not self._has_room(len(self._state.group_by), len(names), self._config.max_group_by):
            return self._reject(ErrorCode.TOO_MANY_GROUP_BY, "group_by", self._config.max_group_by)
        self._state.group_by.extend(names)
        return self

    def having(self, condition: str | Condition) -> QueryBuilder:
        """Set the HAVING fragment (text, or a condition rendered now)."""
        self._state.having = condition if isinstance(condition, str) else condition.render()
        return self

    def order_by(self, column: ColumnLike, ascending: bool = True) -> QueryBuilder:
        if not self._has_room(len(self._state.order_by), 1, self._config.max_order_by):
            return self._reject(ErrorCode.TOO_MANY_ORDER_BY, "order_by", self._config.max_order_by)
        self._state.order_by.append(OrderByItem(column=column_name(column), ascending=ascending))
        return self

    def limit(self, n: int) -> QueryBuilder:
        """Set LIMIT; a negative value clears it."""
        self._state.limit = n
        return self

    def offset(self, n: int) -> QueryBuilder:
        """Set OFFSET; a negative value clears it."""
        self._state.offset = n
        return self

    # ------------------------------------------------------------------
    # Common table expressions
    # ------------------------------------------------------------------

    def with_(self, name: str, subquery: str | QueryBuilder) -> QueryBuilder:
        """Prepend ``WITH name AS (<subquery>)`` to a SELECT.

        A subquery builder is rendered immediately; if it fails, its error
        is recorded on this builder and the call is a no-op.
        """
        if not self._has_room(len(self._state.ctes), 1, self._config.max_ctes):
            return self._reject(ErrorCode.TOO_MANY_CTES, "ctes", self._config.max_ctes)
        sql = self._subquery_sql(subquery)
        if sql is None:
            return self
        self._state.ctes.append(CommonTableExpression(name=name, sql=sql))
        return self

    def _subquery_sql(self, subquery: str | QueryBuilder) -> str | None:
        if isinstance(subquery, str):
            return subquery
        result = subquery.build_result()
        if not result.ok:
            self._record(result.error)
            return None
        return result.sql

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> QueryBuilder:
        """Clear every slot and the last error; the config is kept."""
        self._state = QueryState()
        self._last_error = self._blocking_error = NO_ERROR
        return self

    def copy(self) -> QueryBuilder:
        """An independent builder with the same config, state and error."""
        clone = QueryBuilder(self._config)
        clone._state = self._state.model_copy(deep=True)
        clone._last_error = self._last_error
        clone._blocking_error = self._blocking_error
        return clone

    # ------------------------------------------------------------------
    # Finalisation
    # ------------------------------------------------------------------

    def build_result(self) -> BuildResult:
        """Render without raising.

        Returns:
            An ok :class:`BuildResult` with the SQL, or an error result
            carrying the recorded (or render-time) error.
        """
        if self._blocking_error:
            return BuildResult.failure(self._blocking_error)
        try:
            sql = _RENDERER.render(self._state)
        except QueryBuildError as exc:
            self._last_error = exc.to_error()
            return BuildResult.failure(self._last_error)
        self._last_error = NO_ERROR
        return BuildResult.success(sql)

    def build(self) -> str:
        """Render the statement.

        Returns:
            The SQL string, or ``/* ERROR: <message> */`` when an error is
            present and ``raise_on_error`` is off.

        Raises:
            QueryBuildError: (or subclass) if an error is present and
                ``raise_on_error`` is on.
        """
        result = self.build_result()
        if result.ok:
            return result.sql
        if self._config.raise_on_error:
            raise exception_for(result.error)
        return ERROR_SENTINEL.format(message=result.error.message)

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        kind = self.kind.value if self.kind else "None"
        return f"QueryBuilder(kind={kind}, table={self._state.table_name!r})"


def _flatten(items: Sequence[Any]) -> list[ColumnLike]:
    flat: list[ColumnLike] = []
    for item in items:
        if isinstance(item, (str, TypedColumn, ColumnRef)):
            flat.append(item)
        else:
            flat.extend(item)
    return flat
