"""Parameter markers carried by values.

A placeholder is emitted exactly as the marker it represents and is never
quoted or escaped.  The style is inferred from the name::

    placeholder()         # ?
    placeholder("$1")     # $1
    placeholder(2)        # $2
    placeholder("@user")  # @user
    placeholder("id")     # :id
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sqlbrick.schema.expressions import PlaceholderStyle

_PREFIX_STYLES: dict[str, PlaceholderStyle] = {
    PlaceholderStyle.COLON.value: PlaceholderStyle.COLON,
    PlaceholderStyle.AT.value: PlaceholderStyle.AT,
    PlaceholderStyle.NUMERIC.value: PlaceholderStyle.NUMERIC,
}


class Placeholder(BaseModel):
    """A parameter marker.

    Attributes:
        name: The full marker text for named and numeric styles (``":id"``,
            ``"$1"``); empty for the positional style.
        style: The marker style.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ""
    style: PlaceholderStyle = PlaceholderStyle.POSITIONAL

    @classmethod
    def parse(cls, name: str | int = "") -> Placeholder:
        """Build a placeholder, inferring its style from ``name``.

        Args:
            name: Empty for ``?``; a name starting with ``:``, ``@`` or ``$``
                is kept verbatim; any other name gets a ``:`` prefix.  An
                ``int`` N yields the numeric marker ``$N``.

        Returns:
            The placeholder.
        """
        if isinstance(name, int) and not isinstance(name, bool):
            return cls(name=f"${name}", style=PlaceholderStyle.NUMERIC)
        if not name:
            return cls()
        style = _PREFIX_STYLES.get(name[0])
        if style is not None:
            return cls(name=name, style=style)
        return cls(name=f":{name}", style=PlaceholderStyle.COLON)

    def to_sql_string(self) -> str:
        """Return the marker text."""
        if self.style is PlaceholderStyle.POSITIONAL:
            return "?"
        return self.name

    def __str__(self) -> str:
        return self.to_sql_string()


def placeholder(name: str | int = "") -> Placeholder:
    """Shorthand for :meth:`Placeholder.parse`."""
    return Placeholder.parse(name)
