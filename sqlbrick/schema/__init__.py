"""sqlbrick fragment models: values, conditions, columns, tables, joins."""
from sqlbrick.schema.columns import ColumnRef, TypedColumn
from sqlbrick.schema.conditions import (
    CONDITION_ADAPTER,
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
from sqlbrick.schema.config import DEFAULT_CONFIG, BuilderConfig
from sqlbrick.schema.expressions import (
    Aggregate,
    ComparisonOp,
    JoinKind,
    LogicalOp,
    PlaceholderStyle,
    StatementKind,
)
from sqlbrick.schema.joins import Join
from sqlbrick.schema.placeholder import Placeholder
from sqlbrick.schema.query_state import (
    Assignment,
    CommonTableExpression,
    OrderByItem,
    QueryState,
)
from sqlbrick.schema.tables import Table, TableDefinition
from sqlbrick.schema.values import (
    VALUE_ADAPTER,
    BoolValue,
    DateTimeValue,
    FloatValue,
    IntegerValue,
    NullValue,
    PlaceholderValue,
    TextValue,
    Value,
)

__all__ = [
    "Aggregate",
    "Assignment",
    "BetweenCondition",
    "BoolValue",
    "BuilderConfig",
    "ColumnComparisonCondition",
    "ColumnRef",
    "CommonTableExpression",
    "ComparisonCondition",
    "ComparisonOp",
    "CompoundCondition",
    "Condition",
    "CONDITION_ADAPTER",
    "DateTimeValue",
    "DEFAULT_CONFIG",
    "FloatValue",
    "IntegerValue",
    "InvalidCondition",
    "Join",
    "JoinKind",
    "LogicalOp",
    "MembershipCondition",
    "NullCheckCondition",
    "NullValue",
    "OrderByItem",
    "Placeholder",
    "PlaceholderStyle",
    "PlaceholderValue",
    "QueryState",
    "RawCondition",
    "StatementKind",
    "Table",
    "TableDefinition",
    "TextValue",
    "TypedColumn",
    "Value",
    "VALUE_ADAPTER",
]
