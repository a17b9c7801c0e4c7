"""Clause-level SQL builders.

Each class renders exactly one clause of a
:class:`~sqlbrick.schema.query_state.QueryState` and returns an empty
string when the clause is absent, so the renderer can drop it.

Classes
-------
WithClauseBuilder     ``WITH <name> AS (…), …``
SelectClauseBuilder   ``SELECT [DISTINCT] <items | *>``
JoinClauseBuilder     ``<KIND> JOIN … ON …`` (all joins)
WhereClauseBuilder    ``WHERE <c1> AND <c2> …``
GroupByClauseBuilder  ``GROUP BY …``
HavingClauseBuilder   ``HAVING …``
OrderByClauseBuilder  ``ORDER BY … ASC|DESC, …``
PagingClauseBuilder   ``LIMIT n OFFSET n``
ValuesClauseBuilder   ``(<cols>) VALUES (<values>)``
SetClauseBuilder      ``SET <col> = <value>, …``
"""
from __future__ import annotations

from sqlbrick.compile.expression_builder import (
    ConditionBuilder,
    ValueBuilder,
    render_column_ref,
    render_join,
)
from sqlbrick.errors import InvalidConditionError
from sqlbrick.schema.query_state import QueryState


class WithClauseBuilder:
    def build(self, state: QueryState) -> str:
        if not state.ctes:
            return ""
        parts = [f"{cte.name} AS ({cte.sql})" for cte in state.ctes]
        return f"WITH {', '.join(parts)}"


class SelectClauseBuilder:
    """Builds the ``SELECT [DISTINCT] …`` clause."""

    def build(self, state: QueryState) -> str:
        prefix = "SELECT DISTINCT" if state.distinct else "SELECT"
        if not state.columns:
            return f"{prefix} *"
        items = ", ".join(render_column_ref(ref) for ref in state.columns)
        return f"{prefix} {items}"


class JoinClauseBuilder:
    def build(self, state: QueryState) -> str:
        return " ".join(render_join(join) for join in state.joins)


class WhereClauseBuilder:
    """Builds ``WHERE …``; top-level conditions are joined by ``AND``."""

    def __init__(self, condition_builder: ConditionBuilder) -> None:
        self._conditions = condition_builder

    def build(self, state: QueryState) -> str:
        if not state.conditions:
            return ""
        return f"WHERE {self._conditions.build_all(state.conditions)}"


class GroupByClauseBuilder:
    def build(self, state: QueryState) -> str:
        if not state.group_by:
            return ""
        return f"GROUP BY {', '.join(state.group_by)}"


class HavingClauseBuilder:
    def build(self, state: QueryState) -> str:
        return f"HAVING {state.having}" if state.having else ""


class OrderByClauseBuilder:
    def build(self, state: QueryState) -> str:
        if not state.order_by:
            return ""
        items = [f"{o.column} {'ASC' if o.ascending else 'DESC'}" for o in state.order_by]
        return f"ORDER BY {', '.join(items)}"


class PagingClauseBuilder:
    """Builds ``LIMIT`` / ``OFFSET``; negative values mean unset."""

    def build(self, state: QueryState) -> str:
        parts: list[str] = []
        if state.limit >= 0:
            parts.append(f"LIMIT {state.limit}")
        if state.offset >= 0:
            parts.append(f"OFFSET {state.offset}")
        return " ".join(parts)


class ValuesClauseBuilder:
    """Builds the ``(<cols>) VALUES (<values>)`` tail of an INSERT."""

    def __init__(self, value_builder: ValueBuilder) -> None:
        self._values = value_builder

    def build(self, state: QueryState) -> str:
        if not state.values:
            raise InvalidConditionError("INSERT requires at least one value.")
        cols = ", ".join(a.column for a in state.values)
        vals = ", ".join(self._values.build(a.value) for a in state.values)
        return f"({cols}) VALUES ({vals})"


class SetClauseBuilder:
    """Builds the ``SET …`` clause of an UPDATE."""

    def __init__(self, value_builder: ValueBuilder) -> None:
        self._values = value_builder

    def build(self, state: QueryState) -> str:
        if not state.values:
            raise InvalidConditionError("UPDATE requires at least one value.")
        items = ", ".join(f"{a.column} = {self._values.build(a.value)}" for a in state.values)
        return f"SET {items}"
