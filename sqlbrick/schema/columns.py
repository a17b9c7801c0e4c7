"""Column models: select-list references and typed columns.

``ColumnRef`` is a select-list atom (column, optional aggregate, optional
alias).  ``TypedColumn`` is a column bound to its owning table and tagged
with a Python data type; its comparison methods and operators produce
:mod:`~sqlbrick.schema.conditions` models and reject values that do not
match the tag::

    from sqlbrick import column

    age = column("users", "age", int)
    age >= 18            # ComparisonCondition: age >= 18
    age.eq("eighteen")   # TypeError
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from sqlbrick.schema.conditions import (
    BetweenCondition,
    ColumnComparisonCondition,
    ComparisonCondition,
    MembershipCondition,
    NullCheckCondition,
)
from sqlbrick.schema.config import DEFAULT_CONFIG, BuilderConfig
from sqlbrick.schema.expressions import COLUMN_COMPARISON_OPS, Aggregate, ComparisonOp
from sqlbrick.schema.placeholder import Placeholder
from sqlbrick.schema.values import VALUE_TYPES, value

logger = logging.getLogger("sqlbrick")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Select-list reference
# ---------------------------------------------------------------------------


class ColumnRef(BaseModel):
    """A select-list atom: ``FN(column) AS alias``.

    Attributes:
        column: Column name (or ``*``).
        aggregate: Optional aggregate wrapper.
        alias: Optional output alias.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    aggregate: Aggregate = Aggregate.NONE
    alias: str | None = None

    def as_(self, alias: str) -> ColumnRef:
        """Return a copy with the output alias set."""
        return self.model_copy(update={"alias": alias})

    def render(self) -> str:
        """Render this reference as a select-list entry."""
        from sqlbrick.compile.expression_builder import render_column_ref

        return render_column_ref(self)

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# Typed column
# ---------------------------------------------------------------------------

_NUMERIC: tuple[type, ...] = (int, float)


def _accepts(data_type: type | None, x: Any) -> bool:
    if data_type is None or isinstance(x, Placeholder) or isinstance(x, VALUE_TYPES):
        return True
    if isinstance(x, bool) and data_type is not bool:
        return False
    if data_type is float:
        return isinstance(x, _NUMERIC)
    return isinstance(x, data_type)


def _compatible(left: type | None, right: type | None) -> bool:
    if left is None or right is None or left is right:
        return True
    return left in _NUMERIC and right in _NUMERIC


def _type_name(data_type: type | None) -> str:
    return "any" if data_type is None else data_type.__name__


@dataclass(frozen=True, eq=False)
class TypedColumn(Generic[T]):
    """A column of ``table`` holding values of type ``T``.

    The type is enforced when a value or another column is compared with
    this one; an untyped column (``data_type=None``) accepts anything.

    Attributes:
        table: Owning table name (or alias); may be empty.
        name: Column name.
        data_type: Python type of the column's values, or ``None``.
        alias: Output alias used when the column appears in a select list.
        config: Capacity regime; bounds the length of ``IN`` lists.
    """

    table: str
    name: str
    data_type: type | None = None
    alias: str | None = None
    config: BuilderConfig = field(default=DEFAULT_CONFIG, repr=False)

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    @property
    def qualified_name(self) -> str:
        """``table.column`` when the table is known, otherwise the bare name."""
        return f"{self.table}.{self.name}" if self.table else self.name

    def as_(self, alias: str) -> TypedColumn[T]:
        """Return a copy with the select-list alias set."""
        return replace(self, alias=alias)

    def ref(self) -> ColumnRef:
        """The select-list reference for this column."""
        return ColumnRef(column=self.name, alias=self.alias)

    # ------------------------------------------------------------------
    # Value checks
    # ------------------------------------------------------------------

    def coerce(self, x: Any) -> Any:
        if not _accepts(self.data_type, x):
            raise TypeError(
                f"Column '{self.qualified_name}' expects {_type_name(self.data_type)}, "
                f"got {type(x).__name__}."
            )
        return value(x)

    def compare(self, op: ComparisonOp, other: Any):
        if isinstance(other, TypedColumn):
            if op not in COLUMN_COMPARISON_OPS:
                raise ValueError(f"Operator {op.value} cannot compare two columns.")
            if not _compatible(self.data_type, other.data_type):
                raise TypeError(
                    f"Cannot compare column '{self.qualified_name}' "
                    f"({_type_name(self.data_type)}) with '{other.qualified_name}' "
                    f"({_type_name(other.data_type)})."
                )
            return ColumnComparisonCondition(
                left_table=self.table,
                left_column=self.name,
                op=op,
                right_table=other.table,
                right_column=other.name,
            )
        return ComparisonCondition(column=self.name, op=op, value=self.coerce(other))

    def membership(self, values: Iterable[Any], kind: str) -> MembershipCondition:
        items = list(values)
        limit = self.config.max_in_values
        if len(items) > limit:
            logger.debug(
                "Dropping %d value(s) from %s list on '%s' (max_in_values=%d).",
                len(items) - limit,
                kind.upper().replace("_", " "),
                self.qualified_name,
                limit,
            )
            items = items[:limit]
        return MembershipCondition(
            kind=kind,
            column=self.name,
            values=tuple(self.coerce(x) for x in items),
            capacity=limit,
        )

    # ------------------------------------------------------------------
    # Condition construction
    # ------------------------------------------------------------------

    def eq(self, other: Any):
        return self.compare(ComparisonOp.EQ, other)

    def ne(self, other: Any):
        return self.compare(ComparisonOp.NE, other)

    def lt(self, other: Any):
        return self.compare(ComparisonOp.LT, other)

    def le(self, other: Any):
        return self.compare(ComparisonOp.LE, other)

    def gt(self, other: Any):
        return self.compare(ComparisonOp.GT, other)

    def ge(self, other: Any):
        return self.compare(ComparisonOp.GE, other)

    def like(self, pattern: str | Placeholder) -> ComparisonCondition:
        """``column LIKE pattern``; the pattern is always text."""
        return ComparisonCondition(column=self.name, op=ComparisonOp.LIKE, value=value(pattern))

    def not_like(self, pattern: str | Placeholder) -> ComparisonCondition:
        return ComparisonCondition(
            column=self.name, op=ComparisonOp.NOT_LIKE, value=value(pattern)
        )

    def between(self, low: Any, high: Any) -> BetweenCondition:
        return BetweenCondition(column=self.name, low=self.coerce(low), high=self.coerce(high))

    def in_(self, values: Iterable[Any]) -> MembershipCondition:
        """``column IN (...)``; values beyond ``max_in_values`` are dropped."""
        return self.membership(values, "in")

    def not_in(self, values: Iterable[Any]) -> MembershipCondition:
        """``column NOT IN (...)``; values beyond ``max_in_values`` are dropped."""
        return self.membership(values, "not_in")

    def is_null(self) -> NullCheckCondition:
        return NullCheckCondition(kind="is_null", column=self.name)

    def is_not_null(self) -> NullCheckCondition:
        return NullCheckCondition(kind="is_not_null", column=self.name)

    # ------------------------------------------------------------------
    # Operator sugar
    # ------------------------------------------------------------------

    def __eq__(self, other: Any):  # type: ignore[override]
        return self.eq(other)

    def __ne__(self, other: Any):  # type: ignore[override]
        return self.ne(other)

    def __lt__(self, other: Any):
        return self.lt(other)

    def __le__(self, other: Any):
        return self.le(other)

    def __gt__(self, other: Any):
        return self.gt(other)

    def __ge__(self, other: Any):
        return self.ge(other)

    def __hash__(self) -> int:
        return hash((self.table, self.name, self.alias))

    def __str__(self) -> str:
        return self.qualified_name


#: Anything the builder accepts where a column name is expected.
ColumnLike = Union[str, TypedColumn, ColumnRef]


def column_name(col: ColumnLike) -> str:
    """Return the bare column name used in clause lists."""
    if isinstance(col, TypedColumn):
        return col.name
    if isinstance(col, ColumnRef):
        return col.column
    return col


def to_column_ref(col: ColumnLike) -> ColumnRef:
    """Normalise a select-list argument to a :class:`ColumnRef`."""
    if isinstance(col, ColumnRef):
        return col
    if isinstance(col, TypedColumn):
        return col.ref()
    return ColumnRef(column=col)


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def column(
    table: Any,
    name: str,
    data_type: type[T] | None = None,
    config: BuilderConfig | None = None,
) -> TypedColumn[T]:
    """A typed column owned by ``table``.

    Args:
        table: Table name, :class:`~sqlbrick.schema.tables.Table` or
            :class:`~sqlbrick.schema.tables.TableDefinition`.
        name: Column name.
        data_type: Python type of the column's values (``None`` = untyped).
        config: Capacity regime; defaults to the library default.
    """
    from sqlbrick.schema.tables import table_qualifier

    return TypedColumn(
        table=table_qualifier(table),
        name=name,
        data_type=data_type,
        config=config or DEFAULT_CONFIG,
    )


def col(name: str, config: BuilderConfig | None = None) -> TypedColumn[Any]:
    """A bare, untyped column with no owning table."""
    return TypedColumn(table="", name=name, config=config or DEFAULT_CONFIG)


def column_alias(col: TypedColumn[T], alias: str) -> TypedColumn[T]:
    """Return ``col`` with its select-list alias set."""
    return col.as_(alias)


def as_(expr: ColumnLike, alias: str) -> ColumnRef:
    """Alias any select-list expression."""
    return to_column_ref(expr).as_(alias)


def all_of(table: Any = None) -> ColumnRef:
    """The ``*`` select-list entry."""
    return ColumnRef(column="*")


def _aggregate(fn: Aggregate, expr: ColumnLike) -> ColumnRef:
    ref = to_column_ref(expr)
    return ColumnRef(column=ref.column, aggregate=fn, alias=None)


def count(expr: ColumnLike = "*") -> ColumnRef:
    return _aggregate(Aggregate.COUNT, expr)


def sum(expr: ColumnLike) -> ColumnRef:  # noqa: A001
    return _aggregate(Aggregate.SUM, expr)


def avg(expr: ColumnLike) -> ColumnRef:
    return _aggregate(Aggregate.AVG, expr)


def min(expr: ColumnLike) -> ColumnRef:  # noqa: A001
    return _aggregate(Aggregate.MIN, expr)


def max(expr: ColumnLike) -> ColumnRef:  # noqa: A001
    return _aggregate(Aggregate.MAX, expr)


def group_concat(expr: ColumnLike) -> ColumnRef:
    return _aggregate(Aggregate.GROUP_CONCAT, expr)
