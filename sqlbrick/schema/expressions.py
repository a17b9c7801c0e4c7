"""Enumerations shared by the fragment models and the renderer.

Each enum's value is the exact SQL token (or marker prefix) it renders to,
so the compile layer never needs a second lookup table.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Statement kinds
# ---------------------------------------------------------------------------


class StatementKind(str, Enum):
    """The kind of statement a builder is assembling."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    INSERT_OR_REPLACE = "INSERT OR REPLACE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    TRUNCATE = "TRUNCATE"


# ---------------------------------------------------------------------------
# Predicate operator enums
# ---------------------------------------------------------------------------


class ComparisonOp(str, Enum):
    """Binary operators between a column and a value (or another column)."""

    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"

    @classmethod
    def parse(cls, op: str | ComparisonOp) -> ComparisonOp:
        """Resolve an operator given as SQL text or by member name.

        ``"<>"`` is accepted as an alias of ``!=``; matching is
        case-insensitive and ignores surrounding whitespace.

        Args:
            op: ``"="``, ``">="``, ``"like"``, ``"NOT_LIKE"``, ``"GE"`` ...

        Returns:
            The matching :class:`ComparisonOp`.

        Raises:
            ValueError: If ``op`` is not a recognised operator.
        """
        if isinstance(op, ComparisonOp):
            return op
        token = " ".join(op.strip().upper().split())
        if token == "<>":
            return cls.NE
        for member in cls:
            if token in (member.value, member.name):
                return member
        raise ValueError(f"Unknown comparison operator: {op!r}")


#: Operators accepted between two columns.
COLUMN_COMPARISON_OPS: frozenset[ComparisonOp] = frozenset(
    {
        ComparisonOp.EQ,
        ComparisonOp.NE,
        ComparisonOp.LT,
        ComparisonOp.LE,
        ComparisonOp.GT,
        ComparisonOp.GE,
    }
)


class LogicalOp(str, Enum):
    """Connectives of a compound condition."""

    AND = "AND"
    OR = "OR"


# ---------------------------------------------------------------------------
# Select-list aggregates
# ---------------------------------------------------------------------------


class Aggregate(str, Enum):
    """Aggregate wrapper of a select-list column."""

    NONE = ""
    COUNT = "COUNT"
    SUM = "SUM"
    AVG = "AVG"
    MIN = "MIN"
    MAX = "MAX"
    GROUP_CONCAT = "GROUP_CONCAT"


# ---------------------------------------------------------------------------
# Joins
# ---------------------------------------------------------------------------


class JoinKind(str, Enum):
    """SQL join type."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"
    CROSS = "CROSS"


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------


class PlaceholderStyle(str, Enum):
    """Parameter marker style; the value is the marker prefix."""

    POSITIONAL = "?"
    NUMERIC = "$"
    COLON = ":"
    AT = "@"
