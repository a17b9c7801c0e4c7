"""Capacity bounds and error-reporting mode for query builders.

A ``BuilderConfig`` is an immutable value attached to every builder and
every column.  It has no global mutable counterpart: custom limits are
expressed by constructing another instance::

    from sqlbrick import BuilderConfig, QueryBuilder

    strict = BuilderConfig(max_columns=64, raise_on_error=True)
    builder = QueryBuilder(strict)

CamelCase option names (``MaxColumns``, ``RaiseOnError`` ...) are accepted
as aliases, so a settings mapping can be validated directly::

    config = BuilderConfig.from_mapping({"MaxConditions": 32})
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sqlbrick.errors import ConfigError


class BuilderConfig(BaseModel):
    """Capacity of each bounded builder slot plus the error mode.

    Attributes:
        max_columns: Select-list entries, and separately INSERT/UPDATE values.
        max_conditions: Top-level WHERE conditions.
        max_joins: JOIN clauses.
        max_order_by: ORDER BY entries.
        max_group_by: GROUP BY entries.
        max_in_values: Values kept in one ``IN`` / ``NOT IN`` list.
        max_ctes: Common table expressions in a ``WITH`` prefix.
        raise_on_error: Raise recorded errors instead of only recording them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    max_columns: int = Field(32, ge=1, alias="MaxColumns")
    max_conditions: int = Field(16, ge=1, alias="MaxConditions")
    max_joins: int = Field(4, ge=1, alias="MaxJoins")
    max_order_by: int = Field(8, ge=1, alias="MaxOrderBy")
    max_group_by: int = Field(8, ge=1, alias="MaxGroupBy")
    max_in_values: int = Field(16, ge=1, alias="MaxInValues")
    max_ctes: int = Field(4, ge=1, alias="MaxCtes")
    raise_on_error: bool = Field(False, alias="RaiseOnError")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BuilderConfig:
        """Validate a plain mapping into a config.

        Args:
            data: Option names (Python or alias form) mapped to values.

        Returns:
            The validated config.

        Raises:
            ConfigError: If an option is unknown or out of range.
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise ConfigError(
                f"Invalid builder configuration: {exc.error_count()} error(s).",
                errors=exc.errors(include_url=False),
            ) from exc


#: Shared default configuration.
DEFAULT_CONFIG = BuilderConfig()
