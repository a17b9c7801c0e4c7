"""WHERE-clause condition models.

``Condition`` is a pydantic discriminated union keyed on ``kind``.  Each
alternative is a frozen model carrying a ``negated`` flag; compound
conditions hold their children structurally and are walked at render time.

Composition uses Python's bitwise operators (``&``, ``|``, ``~``) or the
named methods ``and_`` / ``or_`` / ``not_``::

    from sqlbrick import col

    cond = col("a").eq(1) & (col("b").eq(2) | col("c").is_null())
    cond.render()  # "(a = 1) AND ((b = 2) OR (c IS NULL))"

Negation toggles the flag, so ``~~c`` renders exactly like ``c``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from sqlbrick.schema.expressions import ComparisonOp, LogicalOp
from sqlbrick.schema.values import Value

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class _ConditionBase(BaseModel):
    """Combinators shared by every condition alternative."""

    model_config = _FROZEN

    negated: bool = False

    def not_(self) -> Condition:
        """Return a copy with ``negated`` toggled."""
        return self.model_copy(update={"negated": not self.negated})  # type: ignore[return-value]

    def and_(self, other: Condition) -> Condition:
        """Return ``(self) AND (other)``."""
        return CompoundCondition(op=LogicalOp.AND, left=self, right=other)  # type: ignore[arg-type]

    def or_(self, other: Condition) -> Condition:
        """Return ``(self) OR (other)``."""
        return CompoundCondition(op=LogicalOp.OR, left=self, right=other)  # type: ignore[arg-type]

    def __invert__(self) -> Condition:
        return self.not_()

    def __and__(self, other: Condition) -> Condition:
        return self.and_(other)

    def __or__(self, other: Condition) -> Condition:
        return self.or_(other)

    def render(self) -> str:
        """Render this condition as a SQL boolean expression."""
        from sqlbrick.compile.expression_builder import render_condition

        return render_condition(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# Concrete condition types
# ---------------------------------------------------------------------------


class InvalidCondition(_ConditionBase):
    """Placeholder for a condition that was never set; renders ``INVALID CONDITION``."""

    kind: Literal["invalid"] = "invalid"


class RawCondition(_ConditionBase):
    """A trusted SQL fragment emitted verbatim."""

    kind: Literal["raw"] = "raw"
    text: str


class NullCheckCondition(_ConditionBase):
    """``column IS NULL`` or ``column IS NOT NULL``."""

    kind: Literal["is_null", "is_not_null"] = "is_null"
    column: str


class ComparisonCondition(_ConditionBase):
    """``column OP value``."""

    kind: Literal["comparison"] = "comparison"
    column: str
    op: ComparisonOp
    value: Value


class ColumnComparisonCondition(_ConditionBase):
    """``[left_table.]left_column OP [right_table.]right_column``.

    Table qualifiers are rendered only when both sides carry one.
    """

    kind: Literal["column_comparison"] = "column_comparison"
    left_table: str = ""
    left_column: str
    op: ComparisonOp
    right_table: str = ""
    right_column: str


class BetweenCondition(_ConditionBase):
    """``column BETWEEN low AND high``."""

    kind: Literal["between"] = "between"
    column: str
    low: Value
    high: Value


class MembershipCondition(_ConditionBase):
    """``column IN (...)`` or ``column NOT IN (...)``.

    Attributes:
        values: The retained values, already truncated to ``capacity``.
        capacity: The ``max_in_values`` bound this list was built under.
    """

    kind: Literal["in", "not_in"] = "in"
    column: str
    values: tuple[Value, ...] = ()
    capacity: int = Field(16, ge=1)


class CompoundCondition(_ConditionBase):
    """``(left) AND|OR (right)``."""

    kind: Literal["compound"] = "compound"
    op: LogicalOp
    left: Condition
    right: Condition


# ---------------------------------------------------------------------------
# Discriminated union
# ---------------------------------------------------------------------------

Condition = Annotated[
    Union[
        InvalidCondition,
        RawCondition,
        NullCheckCondition,
        ComparisonCondition,
        ColumnComparisonCondition,
        BetweenCondition,
        MembershipCondition,
        CompoundCondition,
    ],
    Field(discriminator="kind"),
]

# Resolve the recursive reference in CompoundCondition.
CompoundCondition.model_rebuild()

#: Parse a raw dict into a typed Condition.
CONDITION_ADAPTER: TypeAdapter[Condition] = TypeAdapter(Condition)


# ---------------------------------------------------------------------------
# Free-function forms
# ---------------------------------------------------------------------------


def raw(text: str) -> RawCondition:
    """A trusted SQL fragment; it is neither validated nor escaped."""
    return RawCondition(text=text)


def and_(left: Condition, right: Condition, *more: Condition) -> Condition:
    """Left-fold ``AND`` over two or more conditions."""
    result = left.and_(right)
    for cond in more:
        result = result.and_(cond)
    return result


def or_(left: Condition, right: Condition, *more: Condition) -> Condition:
    """Left-fold ``OR`` over two or more conditions."""
    result = left.or_(right)
    for cond in more:
        result = result.or_(cond)
    return result


def not_(cond: Condition) -> Condition:
    """Toggle the negation of ``cond``."""
    return cond.not_()


def iter_membership(cond: Condition):
    """Yield every membership node of a condition tree, depth first."""
    if isinstance(cond, MembershipCondition):
        yield cond
    elif isinstance(cond, CompoundCondition):
        yield from iter_membership(cond.left)
        yield from iter_membership(cond.right)
