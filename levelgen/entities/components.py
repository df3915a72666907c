from __future__ import annotations

from typing import NamedTuple, Protocol, runtime_checkable

from levelgen.constants import Direction


class Coordinate(NamedTuple):
    """Immutable grid position."""

    x: int
    y: int

    def step(self, direction: Direction, distance: int = 1) -> "Coordinate":
        return Coordinate(self.x + direction.dx * distance, self.y + direction.dy * distance)


@runtime_checkable
class Visible(Protocol):
    """Objects whose visibility can be toggled (debug reveal, discovery)."""

    visible: bool


@runtime_checkable
class Displacing(Protocol):
    """Occupants that remember the cell they were placed over."""

    displaced: object
