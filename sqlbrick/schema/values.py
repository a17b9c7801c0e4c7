"""Typed literal models.

``Value`` is a pydantic discriminated union keyed on ``kind``; exactly one
alternative is active per instance.  Instances are immutable and can be
dumped with ``model_dump()`` and parsed back through :data:`VALUE_ADAPTER`::

    from sqlbrick.schema.values import VALUE_ADAPTER, value

    v = value("O'Brien")
    assert VALUE_ADAPTER.validate_python(v.model_dump()) == v

Rendering lives in :mod:`sqlbrick.compile.expression_builder`; the models
only carry data.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from sqlbrick.schema.placeholder import Placeholder

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class _ValueBase(BaseModel):
    model_config = _FROZEN

    def to_sql_string(self) -> str:
        """Render this value as a SQL literal."""
        from sqlbrick.compile.expression_builder import render_value

        return render_value(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.to_sql_string()


# ---------------------------------------------------------------------------
# Concrete value types
# ---------------------------------------------------------------------------


class NullValue(_ValueBase):
    """SQL ``NULL``."""

    kind: Literal["null"] = "null"


class IntegerValue(_ValueBase):
    """A signed 64-bit integer."""

    kind: Literal["integer"] = "integer"
    value: int = Field(ge=INT64_MIN, le=INT64_MAX)


class FloatValue(_ValueBase):
    """A 64-bit IEEE float."""

    kind: Literal["float"] = "float"
    value: float


class BoolValue(_ValueBase):
    """A boolean, rendered as ``1`` / ``0``."""

    kind: Literal["bool"] = "bool"
    value: bool


class TextValue(_ValueBase):
    """A string, rendered single-quoted with ``'`` doubled."""

    kind: Literal["text"] = "text"
    value: str


class PlaceholderValue(_ValueBase):
    """A parameter marker, rendered unquoted."""

    kind: Literal["placeholder"] = "placeholder"
    placeholder: Placeholder


class DateTimeValue(_ValueBase):
    """A date, time or timestamp, rendered as a quoted ISO-8601 string."""

    kind: Literal["datetime"] = "datetime"
    value: datetime | date | time


# ---------------------------------------------------------------------------
# Discriminated union
# ---------------------------------------------------------------------------

Value = Annotated[
    Union[
        NullValue,
        IntegerValue,
        FloatValue,
        BoolValue,
        TextValue,
        PlaceholderValue,
        DateTimeValue,
    ],
    Field(discriminator="kind"),
]

#: Parse a raw dict into a typed Value.
VALUE_ADAPTER: TypeAdapter[Value] = TypeAdapter(Value)

#: Every concrete Value class, for ``isinstance`` checks.
VALUE_TYPES: tuple[type[BaseModel], ...] = (
    NullValue,
    IntegerValue,
    FloatValue,
    BoolValue,
    TextValue,
    PlaceholderValue,
    DateTimeValue,
)

NULL = NullValue()


def value(x: Any) -> Value:
    """Convert a Python object to a typed ``Value``.

    Args:
        x: ``None``, ``bool``, ``int``, ``float``, ``str``, an ``Enum``
            member, a ``datetime`` / ``date`` / ``time``, a
            :class:`~sqlbrick.schema.placeholder.Placeholder`, or an
            existing ``Value`` (returned unchanged).

    Returns:
        The matching ``Value`` alternative.

    Raises:
        TypeError: If ``x`` has no SQL literal form.
        ValueError: If an integer does not fit in 64 signed bits.
    """
    if isinstance(x, VALUE_TYPES):
        return x  # type: ignore[return-value]
    if x is None:
        return NULL
    if isinstance(x, Placeholder):
        return PlaceholderValue(placeholder=x)
    if isinstance(x, bool):
        return BoolValue(value=x)
    if isinstance(x, Enum):
        return value(x.value)
    if isinstance(x, int):
        if not INT64_MIN <= x <= INT64_MAX:
            raise ValueError(f"Integer {x} does not fit in a signed 64-bit value.")
        return IntegerValue(value=x)
    if isinstance(x, float):
        return FloatValue(value=x)
    if isinstance(x, str):
        return TextValue(value=x)
    if isinstance(x, (datetime, date, time)):
        return DateTimeValue(value=x)
    raise TypeError(f"Unsupported SQL value type: {type(x).__name__}")
