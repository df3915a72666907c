# levelgen/world/game_map.py
from typing import Callable, Final, Iterator, List, Tuple, Union

import numpy as np
import structlog

from levelgen.constants import MAP_HEIGHT, MAP_WIDTH, CellKind
from levelgen.entities.components import Coordinate
from levelgen.entities.monsters import Monster
from levelgen.items.objects import Item
from levelgen.world.cells import Door, Empty, Entrance, Stairs, Wall

log = structlog.get_logger()

Cell = Union[Wall, Empty, Door, Stairs, Entrance, Item, Monster]
CellFactory = Callable[[], Cell]

# Byte values written by kinds(); mirrors CellKind.
KIND_DTYPE: Final = np.uint8


def cell_kind(cell: Cell) -> CellKind:
    """Classify a cell into its union member."""
    match cell:
        case Wall():
            return CellKind.WALL
        case Empty():
            return CellKind.EMPTY
        case Door():
            return CellKind.DOOR
        case Stairs():
            return CellKind.STAIRS
        case Entrance():
            return CellKind.ENTRANCE
        case Item():
            return CellKind.ITEM
        case Monster():
            return CellKind.MONSTER
        case _:
            raise TypeError(f"Not a map cell: {cell!r}")


class GameMap:
    def __init__(
        self,
        width: int = MAP_WIDTH,
        height: int = MAP_HEIGHT,
        fill: CellFactory = Wall,
    ):
        """
        Creates a level of ``height`` rows by ``width`` columns, every slot
        holding its own cell built by ``fill``.
        """
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height

        # One object per slot; cells carry mutable visibility so they are
        # never shared between slots.
        self.cells: np.ndarray = np.empty((height, width), dtype=object)
        for y in range(height):
            for x in range(width):
                self.cells[y, x] = fill()
        log.debug("GameMap cells initialized", shape=(height, width))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def is_interior(self, x: int, y: int) -> bool:
        """True for positions not on the outermost ring."""
        return 0 < x < self._width - 1 and 0 < y < self._height - 1

    def __getitem__(self, pos: Tuple[int, int]) -> Cell:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"Position {(x, y)} outside {self._width}x{self._height} map")
        return self.cells[y, x]

    def __setitem__(self, pos: Tuple[int, int], cell: Cell) -> None:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"Position {(x, y)} outside {self._width}x{self._height} map")
        self.cells[y, x] = cell

    def is_wall(self, pos: Tuple[int, int]) -> bool:
        return isinstance(self[pos], Wall)

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        return isinstance(self[pos], Empty)

    def fill_rect(self, x: int, y: int, width: int, height: int, fill: CellFactory) -> None:
        """Write a fresh ``fill()`` cell into every slot of the rectangle."""
        if not (self.in_bounds(x, y) and self.in_bounds(x + width - 1, y + height - 1)):
            log.error(
                "Rectangle outside map", origin=(x, y), width=width, height=height
            )
            raise ValueError("Rectangle does not fit inside the map.")
        for j in range(y, y + height):
            for i in range(x, x + width):
                self.cells[j, i] = fill()

    def iter_cells(self) -> Iterator[Tuple[Coordinate, Cell]]:
        for y in range(self._height):
            for x in range(self._width):
                yield Coordinate(x, y), self.cells[y, x]

    def kinds(self) -> np.ndarray:
        """Return a ``(height, width)`` array of CellKind values."""
        out = np.empty((self._height, self._width), dtype=KIND_DTYPE)
        for y in range(self._height):
            for x in range(self._width):
                out[y, x] = cell_kind(self.cells[y, x])
        return out

    def positions_of(self, kind: CellKind) -> List[Coordinate]:
        """Coordinates holding cells of ``kind`` in row-major order."""
        return [Coordinate(int(x), int(y)) for y, x in np.argwhere(self.kinds() == kind)]

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self.kinds() == kind))

    def as_text(self, show_hidden: bool = False) -> List[str]:
        """Rows of glyphs. ``show_hidden`` ignores visibility flags."""
        rows = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                cell = self.cells[y, x]
                row.append(cell.symbol if show_hidden else cell.glyph)
            rows.append("".join(row))
        return rows


__all__ = ["Cell", "CellFactory", "GameMap", "cell_kind"]
