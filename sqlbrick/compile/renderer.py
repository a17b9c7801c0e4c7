"""QueryState → SQL statement assembly.

``SQLRenderer`` is the top-level orchestrator.  It wires together the
clause-level builders and emits the statement in a fixed clause order:

  SELECT   ``[WITH …] SELECT [DISTINCT] <cols|*> [FROM <table>] <joins>
           [WHERE …] [GROUP BY …] [HAVING …] [ORDER BY …] [LIMIT n] [OFFSET n]``
  INSERT   ``INSERT [OR REPLACE] INTO <table> (<cols>) VALUES (<values>)``
  UPDATE   ``UPDATE <table> SET <col> = <value>, … [WHERE …]``
  DELETE   ``DELETE FROM <table> [WHERE …]``
  TRUNCATE ``TRUNCATE TABLE <table>``

Clauses that do not belong to the statement kind (e.g. ORDER BY recorded on
a DELETE) are ignored.  Tokens are separated by a single space and no
trailing semicolon is emitted.
"""

from __future__ import annotations

import logging

from sqlbrick.compile.clause_builders import (
    GroupByClauseBuilder,
    HavingClauseBuilder,
    JoinClauseBuilder,
    OrderByClauseBuilder,
    PagingClauseBuilder,
    SelectClauseBuilder,
    SetClauseBuilder,
    ValuesClauseBuilder,
    WhereClauseBuilder,
    WithClauseBuilder,
)
from sqlbrick.compile.expression_builder import ConditionBuilder, ValueBuilder
from sqlbrick.errors import EmptyTableError
from sqlbrick.schema.expressions import StatementKind
from sqlbrick.schema.query_state import QueryState

logger = logging.getLogger("sqlbrick")


class SQLRenderer:
    """Renders an accumulated :class:`QueryState` to a SQL string.

    Args:
        value_builder: Optional literal renderer; defaults to ``ValueBuilder()``.
    """

    def __init__(self, value_builder: ValueBuilder | None = None) -> None:
        values = value_builder or ValueBuilder()
        conditions = ConditionBuilder(values)
        self._with = WithClauseBuilder()
        self._select = SelectClauseBuilder()
        self._joins = JoinClauseBuilder()
        self._where = WhereClauseBuilder(conditions)
        self._group_by = GroupByClauseBuilder()
        self._having = HavingClauseBuilder()
        self._order_by = OrderByClauseBuilder()
        self._paging = PagingClauseBuilder()
        self._values = ValuesClauseBuilder(values)
        self._set = SetClauseBuilder(values)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, state: QueryState) -> str:
        """Render ``state``.

        Args:
            state: The accumulated builder state.

        Returns:
            The SQL statement.

        Raises:
            EmptyTableError: If a non-SELECT statement has no target table.
            InvalidConditionError: If an INSERT / UPDATE has no values.
        """
        kind = state.effective_kind
        if kind is not StatementKind.SELECT and not state.table_name:
            raise EmptyTableError(f"{kind.value} requires a target table.")

        if kind is StatementKind.SELECT:
            parts = self._render_select(state)
        elif kind in (StatementKind.INSERT, StatementKind.INSERT_OR_REPLACE):
            parts = [f"{kind.value} INTO {state.table_name}", self._values.build(state)]
        elif kind is StatementKind.UPDATE:
            parts = [
                f"UPDATE {state.table.render()}",  # type: ignore[union-attr]
                self._set.build(state),
                self._where.build(state),
            ]
        elif kind is StatementKind.DELETE:
            parts = [f"DELETE FROM {state.table.render()}", self._where.build(state)]  # type: ignore[union-attr]
        else:
            parts = [f"TRUNCATE TABLE {state.table_name}"]

        self._log_ignored(kind, state)
        return " ".join(p for p in parts if p)

    # ------------------------------------------------------------------
    # SELECT assembly
    # ------------------------------------------------------------------

    def _render_select(self, state: QueryState) -> list[str]:
        parts = [self._with.build(state), self._select.build(state)]
        if state.table is not None and state.table.name:
            parts.append(f"FROM {state.table.render()}")
        parts.extend(
            [
                self._joins.build(state),
                self._where.build(state),
                self._group_by.build(state),
                self._having.build(state),
                self._order_by.build(state),
                self._paging.build(state),
            ]
        )
        return parts

    @staticmethod
    def _log_ignored(kind: StatementKind, state: QueryState) -> None:
        if kind is StatementKind.SELECT or not logger.isEnabledFor(logging.DEBUG):
            return
        ignored = [
            name
            for name, present in (
                ("columns", bool(state.columns)),
                ("joins", bool(state.joins)),
                ("order_by", bool(state.order_by)),
                ("group_by", bool(state.group_by)),
                ("having", bool(state.having)),
                ("limit", state.limit >= 0),
                ("offset", state.offset >= 0),
                ("distinct", state.distinct),
                ("ctes", bool(state.ctes)),
                (
                    "where",
                    bool(state.conditions)
                    and kind not in (StatementKind.UPDATE, StatementKind.DELETE),
                ),
                (
                    "values",
                    bool(state.values)
                    and kind
                    not in (
                        StatementKind.INSERT,
                        StatementKind.INSERT_OR_REPLACE,
                        StatementKind.UPDATE,
                    ),
                ),
            )
            if present
        ]
        if ignored:
            logger.debug("Ignoring clause(s) %s for %s statement.", ignored, kind.value)
