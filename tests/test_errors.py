"""Unit tests for the error taxonomy and exception mapping."""

from __future__ import annotations

import pytest

from sqlbrick import (
    NO_ERROR,
    CapacityError,
    EmptyTableError,
    ErrorCode,
    InvalidColumnError,
    InvalidConditionError,
    QueryBuildError,
    QueryError,
    SQLBrickError,
)
from sqlbrick.errors import exception_for


def test_no_error_is_falsy():
    assert not NO_ERROR
    assert NO_ERROR.code is ErrorCode.NONE
    assert QueryError(ErrorCode.EMPTY_TABLE, "x")


def test_str_of_error_prefers_message():
    assert str(QueryError(ErrorCode.TOO_MANY_JOINS, "Too many joins (max 4).")) == "Too many joins (max 4)."
    assert str(QueryError(ErrorCode.EMPTY_TABLE)) == "EMPTY_TABLE"


@pytest.mark.parametrize(
    ("code", "slot"),
    [
        (ErrorCode.TOO_MANY_COLUMNS, "columns"),
        (ErrorCode.TOO_MANY_CONDITIONS, "conditions"),
        (ErrorCode.TOO_MANY_JOINS, "joins"),
        (ErrorCode.TOO_MANY_ORDER_BY, "order_by"),
        (ErrorCode.TOO_MANY_GROUP_BY, "group_by"),
        (ErrorCode.TOO_MANY_CTES, "ctes"),
    ],
)
def test_capacity_codes_map_to_capacity_error(code, slot):
    exc = exception_for(QueryError(code, "full", 4))
    assert isinstance(exc, CapacityError)
    assert exc.code is code
    assert exc.slot == slot
    assert exc.capacity == 4


@pytest.mark.parametrize(
    ("code", "cls"),
    [
        (ErrorCode.EMPTY_TABLE, EmptyTableError),
        (ErrorCode.INVALID_COLUMN, InvalidColumnError),
        (ErrorCode.INVALID_CONDITION, InvalidConditionError),
    ],
)
def test_other_codes_map_to_their_class(code, cls):
    exc = exception_for(QueryError(code, "bad"))
    assert type(exc) is cls
    assert exc.code is code
    assert exc.message == "bad"


def test_exception_for_empty_record_raises():
    with pytest.raises(ValueError):
        exception_for(NO_ERROR)


def test_hierarchy():
    assert issubclass(CapacityError, QueryBuildError)
    assert issubclass(EmptyTableError, QueryBuildError)
    assert issubclass(QueryBuildError, SQLBrickError)


def test_to_error_round_trip():
    exc = EmptyTableError("UPDATE requires a target table.")
    assert exc.to_error() == QueryError(ErrorCode.EMPTY_TABLE, "UPDATE requires a target table.")


def test_error_response_payloads():
    assert InvalidConditionError("no values").to_error_response() == {
        "error": "INVALID_CONDITION",
        "message": "no values",
    }
    response = CapacityError("full", ErrorCode.TOO_MANY_JOINS, slot="joins", capacity=4).to_error_response()
    assert response == {
        "error": "TOO_MANY_JOINS",
        "message": "full",
        "details": {"slot": "joins", "capacity": 4},
    }


def test_capacity_error_keeps_capacity_on_record():
    exc = CapacityError("full", ErrorCode.TOO_MANY_JOINS, slot="joins", capacity=4)
    assert exc.to_error() == QueryError(ErrorCode.TOO_MANY_JOINS, "full", 4)
    assert exception_for(exc.to_error()).capacity == 4
