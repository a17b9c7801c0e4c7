"""sqlbrick compilation layer: QueryState → SQL text."""
from sqlbrick.compile.base import BuildResult
from sqlbrick.compile.expression_builder import ConditionBuilder, ValueBuilder
from sqlbrick.compile.renderer import SQLRenderer

__all__ = [
    "BuildResult",
    "ConditionBuilder",
    "SQLRenderer",
    "ValueBuilder",
]
