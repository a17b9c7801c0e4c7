"""JOIN clause model."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sqlbrick.schema.expressions import JoinKind


class Join(BaseModel):
    """A single ``<KIND> JOIN <table> ON <on>`` entry.

    Attributes:
        kind: SQL join type.
        table: Rendered from-list fragment of the joined table.
        on: Rendered ON condition, inserted literally; empty for a bare
            ``CROSS JOIN``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: JoinKind = JoinKind.INNER
    table: str
    on: str = ""

    def render(self) -> str:
        from sqlbrick.compile.expression_builder import render_join

        return render_join(self)
