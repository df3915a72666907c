# levelgen/world/placement.py
"""Puts objects onto open floor.

Every placement starts from a random interior coordinate and random-walks to
the nearest reachable ``Empty`` cell.  The occupant that was there is handed
back (and stored on the new object when it can carry one) so that moving or
removing the object later restores the floor underneath.
"""

from typing import Any, Callable, List, Optional, Tuple

import structlog

from game_rng import GameRNG
from levelgen.constants import RARE_MODULUS
from levelgen.entities.components import Coordinate, Displacing, Visible
from levelgen.world.cells import Empty
from levelgen.world.game_map import Cell, GameMap

log = structlog.get_logger()

Placement = Tuple[Coordinate, Cell]


class Placer:
    def __init__(self, game_map: GameMap, rng: GameRNG, reveal: bool = False):
        self.game_map = game_map
        self.rng = rng
        self.reveal = reveal
        # A walk longer than this has almost surely hit a map with no floor.
        self.max_walk = 64 * game_map.width * game_map.height

    def random_coordinate(self) -> Coordinate:
        return Coordinate(
            self.rng.get_int(1, self.game_map.width - 2),
            self.rng.get_int(1, self.game_map.height - 2),
        )

    def _wrap(self, value: int, upper: int) -> int:
        if value > upper:
            return 1
        if value < 1:
            return upper
        return value

    def find_open_cell(self, seed: Coordinate) -> Coordinate:
        """Random-walk from ``seed`` until standing on an Empty cell.

        Each step nudges x and y by -1, 0 or +1; leaving the interior wraps
        to the opposite side.
        """
        pos = Coordinate(*seed)
        x_max = self.game_map.width - 2
        y_max = self.game_map.height - 2
        for _ in range(self.max_walk):
            if self.game_map.is_empty(pos):
                return pos
            pos = Coordinate(
                self._wrap(pos.x + self.rng.get_int(-1, 1), x_max),
                self._wrap(pos.y + self.rng.get_int(-1, 1), y_max),
            )
        log.error("No open cell reachable", seed=tuple(seed), steps=self.max_walk)
        raise RuntimeError("Random walk found no open cell; the map has no floor.")

    def place(self, seed: Optional[Coordinate], obj: Any) -> Placement:
        """Put ``obj`` on the open cell nearest a walk from ``seed``.

        ``seed=None`` starts from a random interior coordinate. Returns the
        chosen coordinate and the cell that was displaced.
        """
        start = self.random_coordinate() if seed is None else seed
        pos = self.find_open_cell(start)
        displaced = self.game_map[pos]

        if isinstance(obj, Visible):
            obj.visible = self.reveal
        if isinstance(obj, Displacing):
            obj.displaced = displaced

        self.game_map[pos] = obj
        log.debug("Object placed", glyph=obj.symbol, pos=pos)
        return pos, displaced

    def place_many(self, count: int, factory: Callable[[], Any]) -> List[Placement]:
        """Place ``count`` objects built by ``factory``; counts below 1 place nothing."""
        return [self.place(None, factory()) for _ in range(count)]

    def place_rare(self, numerator: int, obj: Any) -> Optional[Placement]:
        """Place ``obj`` with probability ``numerator / 151``."""
        if self.rng.one_in(RARE_MODULUS, numerator):
            return self.place(None, obj)
        return None

    def remove(self, pos: Coordinate) -> Cell:
        """Lift the occupant at ``pos``, restoring what it displaced."""
        occupant = self.game_map[pos]
        underneath = getattr(occupant, "displaced", None)
        self.game_map[pos] = underneath if underneath is not None else Empty()
        log.debug("Object removed", glyph=occupant.symbol, pos=pos)
        return occupant


__all__ = ["Placement", "Placer"]
