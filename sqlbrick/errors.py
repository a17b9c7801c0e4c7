"""Error taxonomy and exception hierarchy for sqlbrick.

Builder failures are first recorded as a :class:`QueryError` on the
builder's last-error slot.  When the builder's config enables
``raise_on_error`` the same failure is raised as the matching
:class:`QueryBuildError` subclass.  All public exceptions inherit from
:class:`SQLBrickError` so callers can catch the base class for any
sqlbrick-specific failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error kinds recorded by a builder."""

    NONE = "NONE"
    TOO_MANY_COLUMNS = "TOO_MANY_COLUMNS"
    TOO_MANY_CONDITIONS = "TOO_MANY_CONDITIONS"
    TOO_MANY_JOINS = "TOO_MANY_JOINS"
    TOO_MANY_ORDER_BY = "TOO_MANY_ORDER_BY"
    TOO_MANY_GROUP_BY = "TOO_MANY_GROUP_BY"
    TOO_MANY_CTES = "TOO_MANY_CTES"
    EMPTY_TABLE = "EMPTY_TABLE"
    # Reserved for column validity checks; never produced by the builder.
    INVALID_COLUMN = "INVALID_COLUMN"
    INVALID_CONDITION = "INVALID_CONDITION"


@dataclass(frozen=True)
class QueryError:
    """The value held in a builder's last-error slot.

    Attributes:
        code: The error kind.
        message: Short human-readable description.
        capacity: Configured capacity of the overflowed slot; ``0`` for
            errors that are not about capacity.
    """

    code: ErrorCode = ErrorCode.NONE
    message: str = ""
    capacity: int = 0

    def __bool__(self) -> bool:
        return self.code is not ErrorCode.NONE

    def __str__(self) -> str:
        return self.message or self.code.value


#: The empty error record (no error present).
NO_ERROR = QueryError()


class SQLBrickError(Exception):
    """Base exception for all sqlbrick errors."""


class ConfigError(SQLBrickError):
    """Raised when a :class:`~sqlbrick.schema.config.BuilderConfig` is invalid.

    Args:
        message: Human-readable description.
        errors: Field-level error details reported by pydantic.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors: list[dict[str, Any]] = errors or []


class QueryBuildError(SQLBrickError):
    """Raised when a builder operation or render fails.

    Args:
        message: Human-readable description.
        code: The error kind.
    """

    code: ErrorCode = ErrorCode.INVALID_CONDITION

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message

    def to_error(self) -> QueryError:
        """Return the last-error record equivalent to this exception."""
        return QueryError(code=self.code, message=self.message)

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for API payloads."""
        return {"error": self.code.value, "message": self.message}


class CapacityError(QueryBuildError):
    """Raised when a bounded builder slot is already full.

    Args:
        message: Human-readable description.
        code: One of the ``TOO_MANY_*`` codes.
        slot: Name of the slot that overflowed (``"columns"``, ``"joins"`` ...).
        capacity: The configured capacity of that slot.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        slot: str = "",
        capacity: int = 0,
    ) -> None:
        super().__init__(message, code)
        self.slot = slot
        self.capacity = capacity

    def to_error(self) -> QueryError:
        return QueryError(code=self.code, message=self.message, capacity=self.capacity)

    def to_error_response(self) -> dict[str, Any]:
        response = super().to_error_response()
        response["details"] = {"slot": self.slot, "capacity": self.capacity}
        return response


class EmptyTableError(QueryBuildError):
    """Raised when a non-SELECT statement is built without a target table."""

    code = ErrorCode.EMPTY_TABLE


class InvalidColumnError(QueryBuildError):
    """Reserved for column validity checks."""

    code = ErrorCode.INVALID_COLUMN


class InvalidConditionError(QueryBuildError):
    """Raised for INSERT / UPDATE without values and internal render failures."""

    code = ErrorCode.INVALID_CONDITION


_CAPACITY_SLOTS: dict[ErrorCode, str] = {
    ErrorCode.TOO_MANY_COLUMNS: "columns",
    ErrorCode.TOO_MANY_CONDITIONS: "conditions",
    ErrorCode.TOO_MANY_JOINS: "joins",
    ErrorCode.TOO_MANY_ORDER_BY: "order_by",
    ErrorCode.TOO_MANY_GROUP_BY: "group_by",
    ErrorCode.TOO_MANY_CTES: "ctes",
}

_ERROR_CLASSES: dict[ErrorCode, type[QueryBuildError]] = {
    ErrorCode.EMPTY_TABLE: EmptyTableError,
    ErrorCode.INVALID_COLUMN: InvalidColumnError,
    ErrorCode.INVALID_CONDITION: InvalidConditionError,
}


def exception_for(error: QueryError) -> QueryBuildError:
    """Build the exception that corresponds to a recorded error.

    Args:
        error: A non-empty last-error record.

    Returns:
        A :class:`QueryBuildError` subclass instance (not raised).

    Raises:
        ValueError: If ``error`` is the empty record.
    """
    if not error:
        raise ValueError("Cannot build an exception from an empty error record.")
    slot = _CAPACITY_SLOTS.get(error.code)
    if slot is not None:
        return CapacityError(error.message, error.code, slot=slot, capacity=error.capacity)
    return _ERROR_CLASSES[error.code](error.message)
