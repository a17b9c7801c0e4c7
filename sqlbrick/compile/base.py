"""Build outcome returned by :meth:`QueryBuilder.build_result`."""
from __future__ import annotations

from dataclasses import dataclass

from sqlbrick.errors import NO_ERROR, QueryError, exception_for


@dataclass(frozen=True)
class BuildResult:
    """Either rendered SQL or the error that prevented rendering.

    Attributes:
        sql: The rendered statement; empty on error.
        error: The error record; :data:`~sqlbrick.errors.NO_ERROR` on success.
    """

    sql: str = ""
    error: QueryError = NO_ERROR

    @classmethod
    def success(cls, sql: str) -> BuildResult:
        return cls(sql=sql)

    @classmethod
    def failure(cls, error: QueryError) -> BuildResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return not self.error

    def unwrap(self) -> str:
        """Return the SQL, raising the matching exception on error.

        Raises:
            QueryBuildError: (or subclass) if the build failed.
        """
        if self.error:
            raise exception_for(self.error)
        return self.sql

    def __bool__(self) -> bool:
        return self.ok
