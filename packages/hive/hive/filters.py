"""Query filter sentinel for World.query()."""

from __future__ import annotations


class Not:
    """Exclude entities that have this component type."""

    __slots__ = ("ctype",)

    def __init__(self, ctype: type) -> None:
        self.ctype = ctype
