"""Table models and declarative table definitions.

``Table`` is the from-list atom (``name`` or ``name alias``).
``TableDefinition`` groups a table with its typed columns so queries can be
written against attributes instead of strings::

    from sqlbrick import define_table

    users = define_table("users", id=int, name=str, active=bool)
    orders = define_table("orders", id=int, user_id=int, total=float)

    users.id == orders.user_id   # users.id = orders.user_id

    u = users.aliased("u")
    u.id == orders.user_id       # u.id = orders.user_id
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from sqlbrick.schema.columns import ColumnRef, TypedColumn, all_of
from sqlbrick.schema.config import DEFAULT_CONFIG, BuilderConfig


class Table(BaseModel):
    """A table name with an optional alias.

    Attributes:
        name: Table name.
        alias: Optional alias; rendered as ``name alias``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    alias: str | None = None

    @property
    def qualifier(self) -> str:
        """The prefix used to qualify this table's columns."""
        return self.alias or self.name

    def render(self) -> str:
        """Render this table as a from-list entry."""
        return f"{self.name} {self.alias}" if self.alias else self.name

    def __str__(self) -> str:
        return self.render()


def table(name: str) -> Table:
    return Table(name=name)


def aliased_table(name: str, alias: str) -> Table:
    return Table(name=name, alias=alias)


# ---------------------------------------------------------------------------
# Declarative definitions
# ---------------------------------------------------------------------------


class TableDefinition:
    """A table plus its typed columns, exposed as attributes.

    Columns whose names collide with the methods of this class (``table``,
    ``columns``, ``aliased``, ``all``) remain reachable through ``[]``.

    Args:
        table: The table (possibly aliased).
        columns: Column name mapped to its Python data type (or ``None``).
        config: Capacity regime attached to every column.
    """

    def __init__(
        self,
        table: Table,
        columns: Mapping[str, type | None],
        config: BuilderConfig | None = None,
    ) -> None:
        self._table = table
        self._types = dict(columns)
        self._config = config or DEFAULT_CONFIG
        self._columns: dict[str, TypedColumn[Any]] = {
            name: TypedColumn(
                table=table.qualifier,
                name=name,
                data_type=data_type,
                config=self._config,
            )
            for name, data_type in self._types.items()
        }

    @property
    def table(self) -> Table:
        return self._table

    @property
    def columns(self) -> tuple[TypedColumn[Any], ...]:
        """Columns in declaration order."""
        return tuple(self._columns.values())

    def all(self) -> ColumnRef:
        """The ``*`` select-list entry."""
        return all_of(self)

    def aliased(self, alias: str) -> TableDefinition:
        """The same definition under ``alias``; columns are re-qualified."""
        return TableDefinition(Table(name=self._table.name, alias=alias), self._types, self._config)

    def __getitem__(self, name: str) -> TypedColumn[Any]:
        return self._columns[name]

    def __getattr__(self, name: str) -> TypedColumn[Any]:
        columns = self.__dict__.get("_columns", {})
        try:
            return columns[name]
        except KeyError:
            raise AttributeError(
                f"Table '{self.__dict__.get('_table', '?')}' has no column '{name}'"
            ) from None

    def __iter__(self) -> Iterator[TypedColumn[Any]]:
        return iter(self._columns.values())

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __repr__(self) -> str:
        return f"TableDefinition({self._table.render()!r}, columns={list(self._types)})"


def define_table(
    table_name: str,
    columns: Mapping[str, type | None] | None = None,
    config: BuilderConfig | None = None,
    /,
    **column_types: type | None,
) -> TableDefinition:
    """Declare a table and its typed columns.

    Every parameter is positional-only, so any column name (``name``,
    ``config`` ...) can be given as a keyword::

        define_table("users", id=int, name=str)
        define_table("users", {"id": int}, strict_config, name=str)

    Args:
        table_name: Table name.
        columns: Column name mapped to its Python data type; declared
            before the keyword columns.
        config: Capacity regime attached to every column.
        **column_types: More columns, in declaration order.

    Returns:
        A :class:`TableDefinition`.
    """
    merged = dict(columns or {})
    merged.update(column_types)
    return TableDefinition(Table(name=table_name), merged, config)


def to_table(target: Any) -> Table:
    """Normalise a ``str`` / ``Table`` / ``TableDefinition`` argument."""
    if isinstance(target, Table):
        return target
    if isinstance(target, TableDefinition):
        return target.table
    if isinstance(target, str):
        return Table(name=target)
    raise TypeError(f"Expected a table name, Table or TableDefinition, got {type(target).__name__}.")


def table_qualifier(target: Any) -> str:
    """The column qualifier for a table argument (alias when present)."""
    return to_table(target).qualifier
