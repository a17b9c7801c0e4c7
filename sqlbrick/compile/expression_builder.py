"""Value and condition SQL renderers.

``ValueBuilder`` and ``ConditionBuilder`` walk the discriminated unions of
:mod:`sqlbrick.schema.values` and :mod:`sqlbrick.schema.conditions` and
dispatch on the active alternative.  Both are stateless; the module-level
``render_*`` functions use shared instances and back the ``render()`` /
``to_sql_string()`` convenience methods on the models.
"""
from __future__ import annotations

import logging
import math

from sqlbrick.schema.columns import ColumnRef
from sqlbrick.schema.conditions import (
    BetweenCondition,
    ColumnComparisonCondition,
    ComparisonCondition,
    CompoundCondition,
    Condition,
    InvalidCondition,
    MembershipCondition,
    NullCheckCondition,
    RawCondition,
)
from sqlbrick.schema.expressions import Aggregate, JoinKind, PlaceholderStyle
from sqlbrick.schema.joins import Join
from sqlbrick.schema.values import (
    BoolValue,
    DateTimeValue,
    FloatValue,
    IntegerValue,
    NullValue,
    PlaceholderValue,
    TextValue,
    Value,
)

logger = logging.getLogger("sqlbrick")

INVALID_CONDITION_SQL = "INVALID CONDITION"


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def quote_text(text: str) -> str:
    """Single-quote ``text``, doubling embedded quotes; nothing else is escaped."""
    escaped = text.replace("'", "''")
    return f"'{escaped}'"


def format_float(number: float) -> str:
    """Shortest round-trip decimal form with a digit on both sides of the point."""
    text = repr(number)
    if "e" in text:
        mantissa, exponent = text.split("e", 1)
        if "." not in mantissa:
            mantissa = f"{mantissa}.0"
        return f"{mantissa}e{exponent}"
    return text


class ValueBuilder:
    """Renders a typed :data:`~sqlbrick.schema.values.Value` as a SQL literal."""

    def build(self, val: Value) -> str:
        if isinstance(val, NullValue):
            return "NULL"
        if isinstance(val, BoolValue):
            return "1" if val.value else "0"
        if isinstance(val, IntegerValue):
            return str(val.value)
        if isinstance(val, FloatValue):
            if not math.isfinite(val.value):
                logger.warning("Non-finite float %r rendered as NULL.", val.value)
                return "NULL"
            return format_float(val.value)
        if isinstance(val, TextValue):
            return quote_text(val.value)
        if isinstance(val, PlaceholderValue):
            marker = val.placeholder
            return "?" if marker.style is PlaceholderStyle.POSITIONAL else marker.name
        if isinstance(val, DateTimeValue):
            return quote_text(val.value.isoformat())
        return "NULL"


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class ConditionBuilder:
    """Renders a :data:`~sqlbrick.schema.conditions.Condition` tree.

    Args:
        value_builder: Renderer for embedded literals.
    """

    def __init__(self, value_builder: ValueBuilder | None = None) -> None:
        self._values = value_builder or ValueBuilder()

    def build(self, cond: Condition) -> str:
        body = self._dispatch(cond)
        if cond.negated:
            return f"NOT ({body})"
        return body

    def build_all(self, conditions: list[Condition]) -> str:
        """Render top-level conditions joined by ``AND``."""
        return " AND ".join(self.build(c) for c in conditions)

    def _dispatch(self, cond: Condition) -> str:
        if isinstance(cond, ComparisonCondition):
            return f"{cond.column} {cond.op.value} {self._values.build(cond.value)}"

        if isinstance(cond, NullCheckCondition):
            keyword = "IS NULL" if cond.kind == "is_null" else "IS NOT NULL"
            return f"{cond.column} {keyword}"

        if isinstance(cond, BetweenCondition):
            low = self._values.build(cond.low)
            high = self._values.build(cond.high)
            return f"{cond.column} BETWEEN {low} AND {high}"

        if isinstance(cond, MembershipCondition):
            keyword = "IN" if cond.kind == "in" else "NOT IN"
            items = ", ".join(self._values.build(v) for v in cond.values)
            return f"{cond.column} {keyword} ({items})"

        if isinstance(cond, ColumnComparisonCondition):
            left, right = cond.left_column, cond.right_column
            if cond.left_table and cond.right_table:
                left = f"{cond.left_table}.{left}"
                right = f"{cond.right_table}.{right}"
            return f"{left} {cond.op.value} {right}"

        if isinstance(cond, RawCondition):
            return cond.text

        if isinstance(cond, CompoundCondition):
            return f"({self.build(cond.left)}) {cond.op.value} ({self.build(cond.right)})"

        if isinstance(cond, InvalidCondition):
            logger.warning("Rendering an invalid condition.")
        return INVALID_CONDITION_SQL


# ---------------------------------------------------------------------------
# Select-list atoms and joins
# ---------------------------------------------------------------------------


def render_column_ref(ref: ColumnRef) -> str:
    sql = ref.column
    if ref.aggregate is not Aggregate.NONE:
        sql = f"{ref.aggregate.value}({sql})"
    if ref.alias:
        sql = f"{sql} AS {ref.alias}"
    return sql


def render_join(join: Join) -> str:
    sql = f"{join.kind.value} JOIN {join.table}"
    if join.on or join.kind is not JoinKind.CROSS:
        sql = f"{sql} ON {join.on}"
    return sql


_VALUES = ValueBuilder()
_CONDITIONS = ConditionBuilder(_VALUES)


def render_value(val: Value) -> str:
    return _VALUES.build(val)


def render_condition(cond: Condition) -> str:
    return _CONDITIONS.build(cond)
