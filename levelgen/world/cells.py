# levelgen/world/cells.py
"""Terrain cells that make up a level map.

Items and monsters are the other two members of the cell union; they live in
``levelgen.items.objects`` and ``levelgen.entities.monsters``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from levelgen.constants import (
    BLANK_GLYPH,
    COLOR_DEFAULT_BG,
    COLOR_DEFAULT_FG,
    COLOR_PORTAL,
    COLOR_WALL_FG,
    CellKind,
    Color,
)


@dataclass
class Wall:
    visible: bool = False

    kind: ClassVar[CellKind] = CellKind.WALL
    symbol: ClassVar[str] = "#"
    walkable: ClassVar[bool] = False

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return COLOR_WALL_FG

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


@dataclass
class Empty:
    """Open floor. The only cell objects can be placed onto."""

    visible: bool = False

    kind: ClassVar[CellKind] = CellKind.EMPTY
    symbol: ClassVar[str] = "."
    walkable: ClassVar[bool] = True
    displaceable: ClassVar[bool] = True

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return COLOR_DEFAULT_FG

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


@dataclass
class Door:
    open: bool = False
    visible: bool = False
    # Room type handed over by the room builder.
    code: int = 0

    kind: ClassVar[CellKind] = CellKind.DOOR

    @property
    def symbol(self) -> str:
        return "O" if self.open else "D"

    @property
    def walkable(self) -> bool:
        return self.open

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return COLOR_DEFAULT_FG

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


class StairDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass
class Stairs:
    direction: StairDirection
    target: int
    visible: bool = False

    kind: ClassVar[CellKind] = CellKind.STAIRS
    walkable: ClassVar[bool] = True

    @property
    def symbol(self) -> str:
        return "<" if self.direction is StairDirection.UP else ">"

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return COLOR_DEFAULT_FG

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


@dataclass
class Entrance:
    """Named portal on the home level. Always shown."""

    symbol: str
    target: int
    label: str

    kind: ClassVar[CellKind] = CellKind.ENTRANCE
    walkable: ClassVar[bool] = True

    @property
    def glyph(self) -> str:
        return self.symbol

    @property
    def fg(self) -> Color:
        return COLOR_PORTAL

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG


__all__ = ["Wall", "Empty", "Door", "StairDirection", "Stairs", "Entrance"]
